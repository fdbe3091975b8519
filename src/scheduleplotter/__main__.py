"""
Run with: python -m scheduleplotter solution.json
"""
import sys

from scheduleplotter.main import main

if __name__ == "__main__":
    sys.exit(main())
