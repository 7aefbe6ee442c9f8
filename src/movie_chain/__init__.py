"""Movie chain: connect two performers through a chain of shared film credits"""

__version__ = "0.1.0"
