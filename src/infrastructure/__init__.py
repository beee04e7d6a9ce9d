"""Infrastructure Layer.

File I/O and image encoding. Everything here consumes or returns domain
objects from `domain.terrain`.
"""
