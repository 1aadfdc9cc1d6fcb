"""Material storage.

Components:
    phong: Phong material with diffuse, specular, reflective and refractive
        weights

Material fields are declared at import time, so import this module after
``ti.init``.
"""
