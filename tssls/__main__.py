"""
Main entry point for the Alloy style sheet Language Server.

This file is executed when running: python -m tssls
"""
from tssls.main import main

if __name__ == "__main__":
    main()
