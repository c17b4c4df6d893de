"""
defocus_deblur.spectral
-----------------------
2-D DFT with a fixed scaling convention (forward scaled by 1/(W·H),
inverse unscaled) and the quadrant swap that moves a kernel's center to
the transform origin.
"""
