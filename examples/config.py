# Example user configuration for codefence
# Place this file at ~/.codefence/config.py
# Any module-level name matching a FenceSettings field is picked up;
# CODEFENCE_<FIELD> environment variables still take precedence.

# Fragment assembly
merge_gap = 10                 # Max lines between fragments that may be joined
min_keywords = 2               # Keyword hits a bracket-free fragment needs
continuation_max_chars = 20    # Short lines after code stay code

# Output
auto_correct = True            # Apply Qiskit syntax repairs (qc.h[0] -> qc.h(0))
escape_prose = False           # Escape markdown specials in prose lines
fix_system_tags = True         # Rewrite <s>...</s> as <SYSTEM>...</SYSTEM>

# Disable individual pattern libraries
detectors = {
    "qsharp": True,
    "qiskit": True,
    "scientific": True,
    "javascript": False,
    "python": True,
}
