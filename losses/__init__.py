# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""kerasport.losses — loss formulas and configured loss objects."""
from __future__ import annotations

from . import functional
from .functional import (
    mean_squared_error,
    mean_absolute_error,
    mean_absolute_percentage_error,
    mean_squared_logarithmic_error,
    huber,
    log_cosh,
    poisson,
    kl_divergence,
    cosine_similarity,
    hinge,
    squared_hinge,
    categorical_hinge,
    binary_crossentropy,
    binary_focal_crossentropy,
    categorical_crossentropy,
    sparse_categorical_crossentropy,
)
from .loss import (
    Reduction,
    Loss,
    LossFunctionWrapper,
    reduce_weighted_values,
    MeanSquaredError,
    MeanAbsoluteError,
    MeanAbsolutePercentageError,
    MeanSquaredLogarithmicError,
    Huber,
    LogCosh,
    Poisson,
    KLDivergence,
    CosineSimilarity,
    Hinge,
    SquaredHinge,
    CategoricalHinge,
    BinaryCrossentropy,
    BinaryFocalCrossentropy,
    CategoricalCrossentropy,
    SparseCategoricalCrossentropy,
)

# Short aliases
mse = mean_squared_error
mae = mean_absolute_error
mape = mean_absolute_percentage_error
msle = mean_squared_logarithmic_error
kld = kl_divergence

ALL_OBJECTS = {
    cls.__name__: cls for cls in (
        MeanSquaredError, MeanAbsoluteError, MeanAbsolutePercentageError,
        MeanSquaredLogarithmicError, Huber, LogCosh, Poisson, KLDivergence,
        CosineSimilarity, Hinge, SquaredHinge, CategoricalHinge,
        BinaryCrossentropy, BinaryFocalCrossentropy,
        CategoricalCrossentropy, SparseCategoricalCrossentropy,
    )
}


def serialize(loss: Loss) -> dict:
    """Return ``{'class_name': ..., 'config': ...}`` for a configured loss."""
    return {'class_name': type(loss).__name__, 'config': loss.get_config()}


def deserialize(config: dict) -> Loss:
    class_name = config.get('class_name')
    cls = ALL_OBJECTS.get(class_name)
    if cls is None:
        raise ValueError(f"Unknown loss class {class_name!r}")
    return cls.from_config(dict(config.get('config', {})))


def get(identifier):
    """Resolve a loss from a name, serialized dict, object or callable.

    Names resolve to the stateless function (``'mse'`` → ``mean_squared_error``);
    class names (``'Huber'``) resolve to a default-configured object.
    """
    if identifier is None:
        return None
    if isinstance(identifier, Loss):
        return identifier
    if isinstance(identifier, dict):
        return deserialize(identifier)
    if isinstance(identifier, str):
        if identifier in ALL_OBJECTS:
            return ALL_OBJECTS[identifier]()
        name = functional.ALIASES.get(identifier, identifier)
        fn = functional.ALL_FUNCTIONS.get(name)
        if fn is None:
            raise ValueError(f"Could not interpret loss identifier: "
                             f"{identifier!r}")
        return fn
    if callable(identifier):
        return identifier
    raise TypeError(f"Could not interpret loss identifier: {identifier!r}")


__all__ = [
    'functional', 'Reduction', 'Loss', 'LossFunctionWrapper',
    'reduce_weighted_values',
    'MeanSquaredError', 'MeanAbsoluteError', 'MeanAbsolutePercentageError',
    'MeanSquaredLogarithmicError', 'Huber', 'LogCosh', 'Poisson',
    'KLDivergence', 'CosineSimilarity', 'Hinge', 'SquaredHinge',
    'CategoricalHinge', 'BinaryCrossentropy', 'BinaryFocalCrossentropy',
    'CategoricalCrossentropy', 'SparseCategoricalCrossentropy',
    'mean_squared_error', 'mean_absolute_error',
    'mean_absolute_percentage_error', 'mean_squared_logarithmic_error',
    'huber', 'log_cosh', 'poisson', 'kl_divergence', 'cosine_similarity',
    'hinge', 'squared_hinge', 'categorical_hinge', 'binary_crossentropy',
    'binary_focal_crossentropy', 'categorical_crossentropy',
    'sparse_categorical_crossentropy',
    'mse', 'mae', 'mape', 'msle', 'kld',
    'serialize', 'deserialize', 'get',
]
