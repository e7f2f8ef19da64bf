# backend/filter_options.py
# Option catalogs for the search filter widgets (values are the URL tokens)

from typing import Dict, Iterable, List

Option = Dict[str, str]


def _opts(*pairs: tuple) -> List[Option]:
    return [{"value": value, "label": label} for value, label in pairs]


CITY_OPTIONS = _opts(
    ("milano", "Milano"),
    ("roma", "Roma"),
    ("napoli", "Napoli"),
    ("torino", "Torino"),
    ("palermo", "Palermo"),
    ("genova", "Genova"),
    ("bologna", "Bologna"),
    ("firenze", "Firenze"),
    ("bari", "Bari"),
    ("venezia", "Venezia"),
    ("verona", "Verona"),
    ("padova", "Padova"),
    ("trieste", "Trieste"),
    ("como", "Como"),
)

# Macro areas; selectable but not matched against listings
LOCATION_OPTIONS = _opts(
    ("dolomiti", "Dolomiti"),
    ("venezia", "Venezia e Laguna"),
    ("prosecco", "Colline del Prosecco"),
    ("como", "Lago di Como"),
    ("garda", "Lago di Garda"),
    ("toscana", "Toscana"),
)

ZONE_OPTIONS = _opts(
    ("centro-storico", "Centro Storico"),
    ("zona-residenziale", "Zona Residenziale"),
    ("periferia", "Periferia"),
    ("zona-commerciale", "Zona Commerciale"),
    ("lungomare", "Lungomare"),
    ("collina", "Collina"),
    ("montagna", "Montagna"),
    ("lago", "Lago"),
)

PROPERTY_TYPE_OPTIONS = _opts(
    ("appartamento", "Appartamento"),
    ("attico", "Attico"),
    ("villa", "Villa"),
    ("villetta", "Villetta"),
    ("casa-indipendente", "Casa Indipendente"),
    ("casa-a-schiera", "Casa a Schiera"),
    ("loft", "Loft"),
    ("mansarda", "Mansarda"),
    ("rustico", "Rustico"),
    ("chalet", "Chalet"),
    ("dimora-storica", "Dimora Storica"),
)

CONTRACT_TYPE_OPTIONS = _opts(
    ("vendita", "In Vendita"),
    ("affitto", "In Affitto"),
    ("entrambi", "Entrambi"),
)

BEDROOM_OPTIONS = _opts(
    ("1", "1 Camera"),
    ("2", "2 Camere"),
    ("3", "3 Camere"),
    ("4", "4 Camere"),
    ("5+", "5+ Camere"),
)

BATHROOM_OPTIONS = _opts(
    ("1", "1 Bagno"),
    ("2", "2 Bagni"),
    ("3", "3 Bagni"),
    ("4+", "4+ Bagni"),
)

AREA_MIN_OPTIONS = _opts(
    ("30", "30 mq"),
    ("50", "50 mq"),
    ("70", "70 mq"),
    ("90", "90 mq"),
    ("120", "120 mq"),
    ("150", "150 mq"),
    ("200", "200 mq"),
    ("300", "300 mq"),
)

AREA_MAX_OPTIONS = _opts(
    ("50", "50 mq"),
    ("70", "70 mq"),
    ("90", "90 mq"),
    ("120", "120 mq"),
    ("150", "150 mq"),
    ("200", "200 mq"),
    ("300", "300 mq"),
    ("500+", "500+ mq"),
)

PRICE_MIN_OPTIONS = _opts(
    ("50000", "50.000 €"),
    ("100000", "100.000 €"),
    ("200000", "200.000 €"),
    ("300000", "300.000 €"),
    ("500000", "500.000 €"),
    ("750000", "750.000 €"),
    ("1000000", "1.000.000 €"),
)

PRICE_MAX_OPTIONS = _opts(
    ("100000", "100.000 €"),
    ("200000", "200.000 €"),
    ("300000", "300.000 €"),
    ("500000", "500.000 €"),
    ("750000", "750.000 €"),
    ("1000000", "1.000.000 €"),
    ("2000000", "2.000.000 €"),
    ("5000000", "5.000.000 €"),
)

ENERGY_RATING_OPTIONS = _opts(*((r, f"Classe {r}") for r in ("A4", "A3", "A2", "A1", "B", "C", "D", "E", "F", "G")))


def get_filter_options() -> Dict[str, List[Option]]:
    """All option lists keyed by the filter they feed."""
    return {
        "city": CITY_OPTIONS,
        "location": LOCATION_OPTIONS,
        "zones": ZONE_OPTIONS,
        "propertyType": PROPERTY_TYPE_OPTIONS,
        "contractType": CONTRACT_TYPE_OPTIONS,
        "bedrooms": BEDROOM_OPTIONS,
        "bathrooms": BATHROOM_OPTIONS,
        "areaMin": AREA_MIN_OPTIONS,
        "areaMax": AREA_MAX_OPTIONS,
        "priceMin": PRICE_MIN_OPTIONS,
        "priceMax": PRICE_MAX_OPTIONS,
        "energyRating": ENERGY_RATING_OPTIONS,
    }


def option_label(options: List[Option], value: str) -> str:
    """Display label for a token, falling back to the token itself."""
    for option in options:
        if option["value"] == value:
            return option["label"]
    return value


def option_values(options: List[Option], current: Iterable[str]) -> List[str]:
    """Option tokens plus any current token (e.g. from a shared URL) not in the list."""
    values = [o["value"] for o in options]
    return values + [v for v in current if v not in values]


def choice_values(options: List[Option], current: str) -> List[str]:
    """Single-choice tokens: "" (any) first, then the options and `current` if missing."""
    return [""] + option_values(options, [current] if current else [])
