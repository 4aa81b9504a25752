"""QR code encoding, Reed-Solomon coding, packed bit grids, integer helpers,
scope guards, block bookkeeping and random selection."""

__version__ = "0.1.0"
__all__ = ["bitgrid", "reedsolomon", "qrcode", "intmath", "scope", "blocks", "selection"]