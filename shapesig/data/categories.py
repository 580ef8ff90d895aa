"""Category codes of the shape database and their names."""

from typing import Dict, Optional


UNKNOWN_CODE = "Unknown code"

CATEGORIES: Dict[str, str] = {
    "01": "Pigeon",
    "02": "Os",
    "03": "Tapis",
    "04": "Chameau",
    "05": "Voiture simple",
    "06": "Humain",
    "07": "Voiture ancienne",
    "08": "Elephant",
    "09": "Visage",
    "10": "Fourche",
    "11": "Tombe funeraire",
    "12": "Verre a pied",
    "13": "Marteau",
    "14": "Coeur",
    "15": "Cle de voiture",
    "16": "Monstre",
    "17": "Raie",
    "18": "Tortue",
}


def get_category_name(code: Optional[str]) -> str:
    """Look up the descriptive name of a category code."""
    if code is None:
        return UNKNOWN_CODE
    return CATEGORIES.get(code, UNKNOWN_CODE)
