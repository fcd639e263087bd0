#!/usr/bin/env python3
"""
Wrapper to run the demo straight from a checkout without installing.
"""
import sys
import os

# Add src to path FIRST
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

if __name__ == "__main__":
    from compass.main import main

    sys.exit(main())
