#!/usr/bin/env python3

import sys
import os

# Ensure src directory is in path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

if __name__ == "__main__":
    from tenfoot.app import main

    main()
