"""One router per resource, each included explicitly by main.py."""
