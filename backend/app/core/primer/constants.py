# File: backend/app/core/primer/constants.py
# Version: v0.2.0
"""
Constants and defaults for the Primer subsystem.

Thermodynamic tables are the nearest-neighbor parameters of Allawi & SantaLucia
(1997), identical to those in SantaLucia (1998). Enthalpies are kcal/mol,
entropies cal/(K·mol), both at 1 M Na+.

All tables are read-only mappings shared process-wide.
"""

from __future__ import annotations

from types import MappingProxyType

# --- Search defaults -----------------------------------------------------------------------------

DEFAULT_SODIUM_CONCENTRATION = 0.2          # mol/L
DEFAULT_PRIMER_DNA_CONCENTRATION = 1e-6     # mol/L

DEFAULT_AMPLICON_LENGTH_MIN = 100
DEFAULT_AMPLICON_LENGTH_MAX = 1000

DEFAULT_PRIMER_LENGTH_MIN = 20
DEFAULT_PRIMER_LENGTH_MAX = 25

DEFAULT_TM_MIN = 55.0
DEFAULT_TM_MAX = 65.0

DEFAULT_MAX_DELTA_TM = 5.0
DEFAULT_START_STEP = 1

# --- Thermodynamics ------------------------------------------------------------------------------

R = 1.987                       # cal / (K·mol)
KELVIN_OFFSET = 273.15
SALT_ENTROPY_FACTOR = 0.368     # SantaLucia (1998) entropy salt correction
ENTROPY_OFFSET = 0.0            # 'A' term of the Tm denominator; folded into initiation values

ENTHALPY_SYMMETRY_CORRECTION = 0.0
ENTROPY_SYMMETRY_CORRECTION = -1.4

ENTHALPY_MONOMER_KCAL_PER_MOLE = MappingProxyType({
    "A": 2.3,
    "C": 0.1,
    "G": 0.1,
    "T": 2.3,
})

ENTROPY_MONOMER_CAL_PER_K_PER_MOLE = MappingProxyType({
    "A": 4.1,
    "C": -2.8,
    "G": -2.8,
    "T": 4.1,
})

ENTHALPY_DIMER_KCAL_PER_MOLE = MappingProxyType({
    "A": MappingProxyType({"A": -7.9, "C": -8.4, "G": -7.8, "T": -7.2}),
    "C": MappingProxyType({"A": -8.5, "C": -8.0, "G": -10.6, "T": -7.8}),
    "G": MappingProxyType({"A": -8.2, "C": -9.8, "G": -8.0, "T": -8.4}),
    "T": MappingProxyType({"A": -7.2, "C": -8.2, "G": -8.5, "T": -7.9}),
})

ENTROPY_DIMER_CAL_PER_K_PER_MOLE = MappingProxyType({
    "A": MappingProxyType({"A": -22.2, "C": -22.4, "G": -21.0, "T": -20.4}),
    "C": MappingProxyType({"A": -22.7, "C": -19.9, "G": -27.2, "T": -21.0}),
    "G": MappingProxyType({"A": -22.2, "C": -24.4, "G": -19.9, "T": -22.4}),
    "T": MappingProxyType({"A": -21.3, "C": -22.2, "G": -22.7, "T": -22.2}),
})

# --- Dimer scoring -------------------------------------------------------------------------------

STANDARD_PRIMER_LENGTH = 10

COMPLEMENTARY_NUCLEOTIDES = MappingProxyType({"A": "T", "C": "G", "G": "C", "T": "A"})
NUCLEOTIDE_HYDROGEN_BONDS = MappingProxyType({"A": 2, "C": 3, "G": 3, "T": 2})
