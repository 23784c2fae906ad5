"""Normalization of feature-extraction responses into one flat vector."""

from typing import Any, Literal

from pydantic import BaseModel


class FeatureResponse(BaseModel):
    """Tagged result of normalize_feature_response().

    Attributes:
        kind:   "flat" when the backend returned a plain vector, "nested" when it
                returned a list of lists (e.g. per-token vectors) that was
                flattened, "invalid" when the payload is not list-shaped.
        vector: The flat vector. Empty for "invalid".
        detail: Why the payload was rejected, only set for "invalid".
    """

    kind: Literal["flat", "nested", "invalid"]
    vector: list[float] = []
    detail: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.kind != "invalid"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def normalize_feature_response(raw: Any) -> FeatureResponse:
    """Turn a raw feature-extraction payload into a single flat vector.

    If the first element is itself a list, the inner lists are concatenated in
    order (one level). Otherwise the payload is used as-is. Anything that is
    not a list of numbers after that step is reported as "invalid".

    Args:
        raw (Any): The parsed JSON response body.

    Returns:
        FeatureResponse: The tagged normalization result.
    """
    if not isinstance(raw, list):
        return FeatureResponse(kind="invalid", detail=f"expected a list, got {type(raw).__name__}")

    kind = "flat"
    vector = raw
    if raw and isinstance(raw[0], list):
        kind = "nested"
        vector = []
        for item in raw:
            if isinstance(item, list):
                vector.extend(item)
            else:
                vector.append(item)

    if not all(_is_number(value) for value in vector):
        return FeatureResponse(kind="invalid", detail="vector contains non-numeric values")
    return FeatureResponse(kind=kind, vector=[float(value) for value in vector])
