"""Allow `python -m gwirian_cli`."""

from .main import main

main()
