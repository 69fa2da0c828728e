"""Deterministic random sources shared by the test cases."""


class FractionRandom:
    """uniform(a, b) always returns the point `fraction` of the way from a to b."""

    def __init__(self, fraction: float):
        self.fraction = fraction

    def uniform(self, a, b):
        return a + (b - a) * self.fraction
