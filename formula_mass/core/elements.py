"""
Standard atomic weights used for molecular mass calculation.

Values are the IUPAC 2019 abridged standard atomic weights
(doi: 10.1515/pac-2019-0603). For elements without a standard atomic
weight, the mass of the longest-lived isotope is used instead.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .errors import UnknownElementError

ATOMIC_MASSES: Mapping[str, float] = MappingProxyType({
    'H': 1.0080,
    'He': 4.0026,
    'Li': 6.94,
    'Be': 9.0122,
    'B': 10.81,
    'C': 12.011,
    'N': 14.007,
    'O': 15.999,
    'F': 18.998,
    'Ne': 20.18,
    'Na': 22.99,
    'Mg': 24.305,
    'Al': 26.982,
    'Si': 28.085,
    'P': 30.974,
    'S': 32.06,
    'Cl': 35.45,
    'Ar': 39.95,
    'K': 39.098,
    'Ca': 40.078,
    'Sc': 44.956,
    'Ti': 47.867,
    'V': 50.942,
    'Cr': 51.996,
    'Mn': 54.938,
    'Fe': 55.845,
    'Co': 58.933,
    'Ni': 58.693,
    'Cu': 63.546,
    'Zn': 65.38,
    'Ga': 69.723,
    'Ge': 72.63,
    'As': 74.922,
    'Se': 78.971,
    'Br': 79.904,
    'Kr': 83.798,
    'Rb': 85.468,
    'Sr': 87.62,
    'Y': 88.906,
    'Zr': 91.224,
    'Nb': 92.906,
    'Mo': 95.95,
    'Tc': 96.90636,
    'Ru': 101.07,
    'Rh': 102.91,
    'Pd': 106.42,
    'Ag': 107.87,
    'Cd': 112.41,
    'In': 114.82,
    'Sn': 118.71,
    'Sb': 121.76,
    'Te': 127.6,
    'I': 126.9,
    'Xe': 131.29,
    'Cs': 132.91,
    'Ba': 137.33,
    'La': 138.91,
    'Ce': 140.12,
    'Pr': 140.91,
    'Nd': 144.24,
    'Pm': 144.91276,
    'Sm': 150.36,
    'Eu': 151.96,
    'Gd': 157.25,
    'Tb': 158.93,
    'Dy': 162.5,
    'Ho': 164.93,
    'Er': 167.26,
    'Tm': 168.93,
    'Yb': 173.05,
    'Lu': 174.97,
    'Hf': 178.49,
    'Ta': 180.95,
    'W': 183.84,
    'Re': 186.21,
    'Os': 190.23,
    'Ir': 192.22,
    'Pt': 195.08,
    'Au': 196.97,
    'Hg': 200.59,
    'Tl': 204.38,
    'Pb': 207.2,
    'Bi': 208.98,
    'Po': 208.98243,
    'At': 209.98715,
    'Rn': 209.98969,
    'Fr': 211.99623,
    'Ra': 226.02541,
    'Ac': 227.02775,
    'Th': 232.04,
    'Pa': 231.04,
    'U': 238.03,
    'Np': 237.04817,
    'Pu': 244.06420,
    'Am': 243.06138,
    'Cm': 247.07035,
    'Bk': 247.07031,
    'Cf': 251.07959,
    'Es': 252.08298,
    'Fm': 257.09511,
    'Md': 258.09843,
    'No': 259.10100,
    'Lr': 262.10962,
    'Rf': 267.12179,
    'Db': 268.12567,
    'Sg': 269.12850,
    'Bh': 270.13337,
    'Hs': 269.13365,
    'Mt': 277.15353,
    'Ds': 281.16455,
    'Rg': 282.16934,
    'Cn': 285.17723,
    'Nh': 285.18011,
    'Fl': 289.19052,
    'Mc': 288.19288,
    'Lv': 291.20101,
    'Ts': 294.21084,
    'Og': 294.21398,
})


def atomic_mass(
    symbol: str,
    masses: Mapping[str, float] = ATOMIC_MASSES,
) -> float:
    """
    Look up the standard atomic weight of an element.

    Args:
        symbol: Case-sensitive element symbol, e.g. 'Fe'
        masses: Mass table to look the symbol up in

    Returns:
        Atomic mass in g/mol

    Raises:
        UnknownElementError: If the symbol is not in the table
    """
    try:
        return masses[symbol]
    except KeyError:
        raise UnknownElementError(symbol) from None
