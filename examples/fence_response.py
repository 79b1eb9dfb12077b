#!/usr/bin/env python3
"""Fence the code in a model response read from a file or stdin.

    python examples/fence_response.py response.txt
    cat response.txt | python examples/fence_response.py --debug
"""
import sys
import argparse

from codefence import transform, set_debug, contains_quantum_code

def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("path", nargs="?", help="Response file (default: stdin)")
    parser.add_argument("--debug", action="store_true", help="Log per-stage counters")
    parser.add_argument("--quantum-only", action="store_true",
                        help="Leave responses without quantum content untouched")
    args = parser.parse_args()

    if args.debug:
        set_debug()

    if args.path:
        with open(args.path, encoding="utf-8") as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    if args.quantum_only and not contains_quantum_code(text):
        sys.stdout.write(text)
        return
    sys.stdout.write(transform(text))

if __name__ == "__main__":
    main()
