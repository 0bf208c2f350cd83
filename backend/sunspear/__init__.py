"""
Sunspear

Management backend for a local container host: compose stacks, an app
marketplace and container lifecycle control.
"""

__version__ = "1.0.0"
