import unittest

class TestImports(unittest.TestCase):
    def test_imports(self):
        """Test that all public modules can be imported"""
        from codefence import transform
        from codefence.config import FenceSettings
        from codefence.dialects import LIBRARIES
        from codefence.models import Fragment

        self.assertIsNotNone(transform)
        self.assertIsNotNone(FenceSettings)
        self.assertIsNotNone(Fragment)
        # Most specific library first
        self.assertEqual([lib.name for lib in LIBRARIES],
                         ["qsharp", "qiskit", "scientific", "javascript", "python"])

if __name__ == "__main__":
    unittest.main()
