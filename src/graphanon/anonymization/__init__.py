from __future__ import annotations

__all__ = [
    "AbstractAnonymizer",
    "AlphaProximityAnonymizer",
    "KDegreeAnonymizer",
    "anonymize_degree_sequence",
    "is_alpha_proximal",
    "is_k_degree_anonymous",
    "max_label_distance",
    "run_attribute_anonymization",
    "run_identity_anonymization",
]
from ._method_k_degree.degree_sequence import anonymize_degree_sequence
from .abstract_anonymizer import AbstractAnonymizer
from .method_alpha_proximity import (
    AlphaProximityAnonymizer,
    is_alpha_proximal,
    max_label_distance,
    run_attribute_anonymization,
)
from .method_k_degree_anonymity import (
    KDegreeAnonymizer,
    is_k_degree_anonymous,
    run_identity_anonymization,
)
