"""
defocus_deblur.utils
--------------------
Display conversion for the restored image and restoration metrics.
"""
