# rdmpass - motion-entropy password derivation service
__version__ = "1.0.0"
