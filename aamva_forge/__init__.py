"""AAMVA-Forge: driver's-license barcode payload codec and cross-validation engine."""

__version__ = "1.0.0"
