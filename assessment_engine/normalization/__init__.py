# ==============================================
# NORMALIZATION
# ==============================================
#
# This package handles everything related to getting assessment
# data into one canonical shape before it is transformed:
#
# Modules:
# --------
# - field_codec.py       → JSON text <-> list codec for semi-structured columns
# - field_normalizer.py  → camelCase / nested payload keys → flattened snake_case
#
# ==============================================

from .field_codec import DecodeResult, FieldCodec, FreeTextOrSequence, ParseFailure, is_blank
from .field_normalizer import FieldNormalizer

__all__ = [
    "DecodeResult",
    "FieldCodec",
    "FieldNormalizer",
    "FreeTextOrSequence",
    "ParseFailure",
    "is_blank",
]
