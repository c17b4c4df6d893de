"""
defocus_deblur.scenes
---------------------
Image sources: grayscale file loading and synthetic sharp test targets.
"""
