"""
Main entry point for mov2mp4 when run from a source checkout.

Converts every MOV file in 'mov/' into 'mp4/'. Pass '--delete' (or '-d') to
remove the originals that were converted successfully.
"""

import sys

from mov2mp4.main import main

if __name__ == "__main__":
    sys.exit(main())
