from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from geoadvisor.constructs.crs_descriptor import CRSDescriptor
from geoadvisor.utils.exceptions import UnsupportedOperationKindError


class OperationKind(Enum):
    """
    The kinds of geometric operation the safety advisor knows how to judge.

    Values:
        DISTANCE_BUFFER: buffering or any other operation driven by a linear distance
        AREA_COMPUTATION: measuring areas
        DIRECTION_COMPUTATION: measuring bearings or azimuths
        TOPOLOGICAL_PREDICATE: intersects, contains, touches and the like
    """

    DISTANCE_BUFFER = "distance_buffer"
    AREA_COMPUTATION = "area_computation"
    DIRECTION_COMPUTATION = "direction_computation"
    TOPOLOGICAL_PREDICATE = "topological_predicate"

    @classmethod
    def parse(cls, kind: Any) -> OperationKind:
        """
        Coerce a value into an OperationKind.

        Accepts an OperationKind, its value ("distance_buffer") or its name
        ("DISTANCE_BUFFER").

        Raises:
            UnsupportedOperationKindError: If the value names none of the four kinds
        """
        if isinstance(kind, cls):
            return kind
        if isinstance(kind, str):
            if kind in cls.__members__:
                return cls[kind]
            try:
                return cls(kind)
            except ValueError:
                pass
        raise UnsupportedOperationKindError(
            f"unsupported operation kind {kind!r}; "
            f"expected one of {[k.name for k in cls]}"
        )


@dataclass(frozen=True)
class OperationRequest:
    """
    A description of a geometric operation someone intends to run.

    Requests are ephemeral: built for one call to an advisor and then discarded.

    Attributes:
        kind: The operation kind (coerced with OperationKind.parse)
        crs: The descriptor of the CRS the input data is expressed in
        extent_diagonal_km: The diagonal of the data's bounding box in kilometres, if known
        spherical_engine_available: Whether the geometry engine can compute on the sphere

    Raises:
        UnsupportedOperationKindError: If kind is not one of the OperationKind values
        ValueError: If the extent is negative or NaN
    """

    kind: OperationKind
    crs: CRSDescriptor
    extent_diagonal_km: Optional[float] = None
    spherical_engine_available: bool = False

    def __post_init__(self):
        object.__setattr__(self, "kind", OperationKind.parse(self.kind))

        if not isinstance(self.crs, CRSDescriptor):
            raise TypeError(
                f"crs must be a CRSDescriptor but found {type(self.crs).__name__}; "
                "use geoadvisor.classify() to build one"
            )

        if self.extent_diagonal_km is not None:
            extent = float(self.extent_diagonal_km)
            if math.isnan(extent) or extent < 0:
                raise ValueError(
                    f"extent_diagonal_km must be a non-negative number but found {self.extent_diagonal_km}"
                )
            object.__setattr__(self, "extent_diagonal_km", extent)
