"""
Explicit mappings between vector schemes.

Every ordered pair of schemes has an affine map y = clip(W @ x + b, 0, 1).
The direct maps are written out below; the rest are compositions through
vibe8. A behavioral profile projects into emotion4 from its scalar fields
rather than through its vibe vector.
"""

from __future__ import annotations

from typing import Mapping

import numpy as np
from viberooms_core.contexts import context_sociality
from viberooms_core.types import (
    SCHEME_AXES,
    BehavioralProfile,
    ContextId,
    SchemeVector,
    VectorScheme,
)

S = VectorScheme

Affine = tuple[np.ndarray, np.ndarray]

# target axis -> ({source axis: weight}, bias)
_DIRECT: dict[tuple[VectorScheme, VectorScheme], dict[str, tuple[dict[str, float], float]]] = {
    (S.VIBE8, S.MOOD5): {
        "melancholy": ({"melancholy": 1.0}, 0.0),
        "longing": ({"romance": 0.7, "nostalgia": 0.3}, 0.0),
        "peace": ({"serenity": 1.0}, 0.0),
        "nostalgia": ({"nostalgia": 1.0}, 0.0),
        "awe": ({"wonder": 0.8, "energy": 0.2}, 0.0),
    },
    (S.MOOD5, S.VIBE8): {
        "melancholy": ({"melancholy": 1.0}, 0.0),
        "wonder": ({"awe": 1.0}, 0.0),
        "nostalgia": ({"nostalgia": 1.0}, 0.0),
        "tension": ({"awe": 0.4, "melancholy": 0.2}, 0.0),
        "energy": ({"awe": 0.5}, 0.0),
        "serenity": ({"peace": 1.0}, 0.0),
        "romance": ({"longing": 1.0}, 0.0),
        "rebellion": ({"awe": 0.2}, 0.0),
    },
    (S.VIBE8, S.EMOTION4): {
        "intensity": ({"tension": 1 / 3, "energy": 1 / 3, "rebellion": 1 / 3}, 0.0),
        "darkness": ({"melancholy": 0.5, "tension": 0.5}, 0.0),
        "complexity": ({"wonder": 0.4, "melancholy": 0.3, "tension": 0.3}, 0.0),
        "sociality": ({"energy": 0.5, "romance": 0.5}, 0.0),
    },
    (S.EMOTION4, S.VIBE8): {
        "melancholy": ({"darkness": 1.0}, 0.0),
        "wonder": ({"complexity": 0.6, "darkness": -0.4}, 0.4),
        "nostalgia": ({"intensity": -0.5, "darkness": 0.5}, 0.5),
        "tension": ({"intensity": 0.6, "darkness": 0.4}, 0.0),
        "energy": ({"intensity": 1.0}, 0.0),
        "serenity": ({"intensity": -1.0}, 1.0),
        "romance": ({"sociality": 1.0}, 0.0),
        "rebellion": ({"intensity": 0.5, "complexity": 0.5}, 0.0),
    },
}


def _affine(
    src: VectorScheme,
    dst: VectorScheme,
    rows: Mapping[str, tuple[Mapping[str, float], float]],
) -> Affine:
    src_axes, dst_axes = SCHEME_AXES[src], SCHEME_AXES[dst]
    W = np.zeros((len(dst_axes), len(src_axes)), dtype=np.float64)
    b = np.zeros((len(dst_axes),), dtype=np.float64)
    for i, axis in enumerate(dst_axes):
        weights, bias = rows[axis]
        for src_axis, w in weights.items():
            W[i, src_axes.index(src_axis)] = w
        b[i] = bias
    return W, b


def _compose(first: Affine, second: Affine) -> Affine:
    W1, b1 = first
    W2, b2 = second
    return W2 @ W1, W2 @ b1 + b2


def _identity(scheme: VectorScheme) -> Affine:
    n = len(SCHEME_AXES[scheme])
    return np.eye(n), np.zeros((n,))


def _build_table() -> dict[tuple[VectorScheme, VectorScheme], Affine]:
    table = {pair: _affine(pair[0], pair[1], rows) for pair, rows in _DIRECT.items()}
    for s in VectorScheme:
        table[(s, s)] = _identity(s)
    # the remaining pairs route through vibe8
    for src in VectorScheme:
        for dst in VectorScheme:
            if (src, dst) in table:
                continue
            table[(src, dst)] = _compose(table[(src, S.VIBE8)], table[(S.VIBE8, dst)])
    return table


PROJECTIONS: dict[tuple[VectorScheme, VectorScheme], Affine] = _build_table()


def project(vec: SchemeVector, target: VectorScheme) -> SchemeVector:
    if vec.scheme == target:
        return vec
    W, b = PROJECTIONS[(vec.scheme, target)]
    y = np.clip(W @ np.asarray(vec.values, dtype=np.float64) + b, 0.0, 1.0)
    return SchemeVector(scheme=target, values=tuple(float(x) for x in y))


# ---- behavioral profile -> emotional state ----
def derive_emotional_state(
    profile: BehavioralProfile, context_id: ContextId
) -> SchemeVector:
    """
    intensity = energy, darkness = 1 - depth, complexity = selectivity,
    sociality = the room's social score.
    """
    return SchemeVector.from_mapping(
        S.EMOTION4,
        {
            "intensity": profile.energy_level,
            "darkness": 1.0 - profile.present_depth,
            "complexity": profile.selectivity,
            "sociality": context_sociality(context_id),
        },
    )


def project_query(
    query: BehavioralProfile | SchemeVector,
    target: VectorScheme,
    context_id: ContextId,
) -> SchemeVector:
    if isinstance(query, BehavioralProfile):
        if target == S.EMOTION4:
            return derive_emotional_state(query, context_id)
        return project(query.vibe, target)
    return project(query, target)
