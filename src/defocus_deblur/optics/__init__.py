"""
defocus_deblur.optics
---------------------
Defocus PSF model: an energy-normalized hard-edged disk, plus a blur
simulator that applies it with periodic boundaries.
"""
