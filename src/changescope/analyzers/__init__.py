"""Change classification and impact propagation."""

from .package_graph import Package, PackageGraph, PackageLocator, DependencyKind
from .path_classifier import (
    PathClassifier, PathCategory, ClassificationRule, ClassificationResult, ChangedPath
)
from .impact_engine import ImpactEngine, ImpactReport
from .impact_analyzer import ImpactAnalyzer

__all__ = [
    "Package", "PackageGraph", "PackageLocator", "DependencyKind",
    "PathClassifier", "PathCategory", "ClassificationRule", "ClassificationResult", "ChangedPath",
    "ImpactEngine", "ImpactReport",
    "ImpactAnalyzer",
]
