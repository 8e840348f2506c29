#!/usr/bin/env python3
"""
OctetField - Segmented IPv4 Address Input
Entry Point Module
Runs the launcher when the project directory is executed with ``python .``.
"""
import sys
import time
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent))
from launcher import main
if __name__ == "__main__":
    start_time = time.time()
    exit_code = main()
    runtime = time.time() - start_time
    print(f"\nOctetField ran for {runtime:.2f} seconds")
    sys.exit(exit_code)
