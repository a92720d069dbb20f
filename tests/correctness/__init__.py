"""
Correctness Test Suite for Density Flows

Mathematical checks that every transformation, the change-of-variables
density, and the coupling-layer flow behave as their formulas say.

Test Modules:
- test_invertibility.py: Forward/inverse consistency and derivative agreement
- test_distribution_preservation.py: Probability mass under the change of variables, and training behavior

All test failures include the **critical-bug** tag for automatic indexing.
"""

TEST_MODULES = [
    "test_invertibility",
    "test_distribution_preservation",
]

TRANSFORMATIONS_TESTED = [
    "LinearTransformation",
    "SigmoidTransformation",
    "LogitTransformation",
    "BSplineTransformation",
    "ComposedTransformation",
    "NormalizingFlow",
]
