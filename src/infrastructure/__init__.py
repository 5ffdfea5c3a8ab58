"""Infrastructure Layer.

File I/O adapters implementing the domain ports.
"""
