"""Allow ``python -m dashboard``."""
from .server import main

main()
