"""
Abstract base class for design code provisions.
Enables extensibility for different codes (NZS 3101, NZS 4230, etc.)
"""

from abc import ABC, abstractmethod
from typing import Tuple


class DesignCode(ABC):
    """
    Abstract base class for structural design codes.

    Purpose:
    - Define interface for code-specific provisions
    - Keep clause formulas out of the calculation engines
    - Centralize code clause references
    """

    @property
    @abstractmethod
    def code_name(self) -> str:
        """Return the code name/version."""
        pass

    @abstractmethod
    def get_beta1(self, fc: float) -> float:
        """Return stress block depth factor β1."""
        pass

    @abstractmethod
    def get_minimum_flexural_steel(self, fc: float, fy: float, breadth: float, d: float) -> float:
        """Return the governing minimum tension steel area (mm²)."""
        pass

    @abstractmethod
    def get_neutral_axis_limit(self, d: float, eps_cu: float, eps_s: float) -> float:
        """Return the largest neutral axis depth for a ductile section (mm)."""
        pass

    @abstractmethod
    def get_concrete_shear_stress(self, fc: float, fy: float, rho: float, d: float) -> float:
        """Return shear stress carried by the concrete, vc (MPa)."""
        pass

    @abstractmethod
    def get_maximum_shear_stress(self, fc: float) -> float:
        """Return the upper limit on nominal shear stress (MPa)."""
        pass

    @abstractmethod
    def get_minimum_stirrup_rate(self, fc: float, breadth: float, fys: float) -> float:
        """Return minimum Av/s (mm²/mm)."""
        pass

    @abstractmethod
    def high_shear_threshold(self, fc: float, breadth: float, d: float) -> float:
        """Return the Vs (N) above which stirrup spacing limits tighten."""
        pass

    @abstractmethod
    def get_maximum_stirrup_spacing(self, d: float, high_shear: bool) -> Tuple[float, str]:
        """Return maximum stirrup spacing along the member and its reason."""
        pass

    @abstractmethod
    def get_maximum_leg_spacing(self, d: float) -> float:
        """Return maximum spacing of stirrup legs across the section."""
        pass

    @abstractmethod
    def get_modulus_of_rupture(self, fc: float) -> float:
        """Return flexural tensile strength used for the cracking moment."""
        pass

    @abstractmethod
    def get_long_term_factor(self, rho_c: float) -> float:
        """Return the long-term deflection multiplier Kcs."""
        pass
