"""
defocus_deblur.restoration
--------------------------
Wiener transfer function construction, spectral filtering, and the
`restore` entry point that wires them together.
"""
