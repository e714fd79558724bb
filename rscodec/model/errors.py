# rscodec/model/errors.py
# exceptions raised by the codec
# an uncorrectable block is NOT an exception, see DecodeStatus in decoder.py


class InvalidParameterError(ValueError):
    """Bad redundancy length, block length or buffer type, detected before any decoding work."""


class DivisionByZeroError(ZeroDivisionError):
    """Field inversion or division by zero. Indicates a bug in the caller."""
