"""Place registry for photo curation."""

from typing import Dict, List

# Default stock-photo queries per place
PLACE_QUERIES: Dict[str, List[str]] = {
    "saadiyat-island": [
        "Saadiyat Island Louvre Abu Dhabi exterior",
        "Saadiyat Island Abu Dhabi beach",
        "Saadiyat cultural district Abu Dhabi",
    ],
    "al-maryah-island": [
        "Al Maryah Island Abu Dhabi skyline",
        "Galleria Al Maryah Island Abu Dhabi",
        "ADGM Abu Dhabi financial district",
    ],
    "downtown-corniche": [
        "Abu Dhabi Corniche skyline",
        "Abu Dhabi skyline corniche sunset",
        "Abu Dhabi downtown waterfront",
    ],
    "yas-island": [
        "Yas Island Abu Dhabi sunset",
        "Yas Marina Circuit Abu Dhabi",
        "Yas Bay waterfront Abu Dhabi night",
    ],
    "al-reem-island": [
        "Al Reem Island Abu Dhabi towers",
        "Abu Dhabi residential towers waterfront",
    ],
    "masdar-city": [
        "Masdar City Abu Dhabi architecture",
        "Masdar City sustainable city",
    ],
    "kizad": [
        "Khalifa Port Abu Dhabi",
        "Abu Dhabi industrial zone port",
    ],
    "difc": [
        "DIFC Gate Building Dubai",
        "DIFC Dubai skyline night",
        "Dubai International Financial Centre",
    ],
    "downtown-dubai": [
        "Burj Khalifa Dubai skyline night",
        "Dubai Fountain night",
        "Downtown Dubai aerial view",
    ],
    "business-bay": [
        "Business Bay Dubai canal skyline",
        "Business Bay Dubai towers night",
    ],
    "dubai-marina": [
        "Dubai Marina skyline",
        "Dubai Marina waterfront",
        "Dubai Marina towers",
    ],
    "jlt": [
        "Jumeirah Lake Towers Dubai",
        "JLT Dubai skyline",
        "Dubai lake towers",
    ],
    "internet-city-media-city": [
        "Dubai Media City",
        "Dubai technology park",
        "Dubai modern office skyline",
    ],
    "deira-old-dubai": [
        "Dubai Creek traditional",
        "Old Dubai souks",
        "Deira Dubai waterfront",
    ],
    "dubai-south": [
        "Dubai Expo city",
        "Dubai South district",
        "Al Maktoum Airport Dubai",
    ],
}

# A stock photo must mention at least one of these to be considered
PLACE_KEYWORDS: Dict[str, List[str]] = {
    "saadiyat-island": ["saadiyat", "louvre", "abu dhabi"],
    "al-maryah-island": ["abu dhabi", "maryah", "adgm", "galleria"],
    "downtown-corniche": ["abu dhabi", "corniche"],
    "yas-island": ["yas", "abu dhabi", "ferrari", "f1"],
    "al-reem-island": ["abu dhabi", "reem"],
    "masdar-city": ["masdar", "abu dhabi"],
    "kizad": ["abu dhabi", "khalifa", "port", "industrial"],
    "difc": ["difc", "dubai", "financial"],
    "downtown-dubai": ["dubai", "burj khalifa", "khalifa", "fountain", "downtown"],
    "business-bay": ["dubai", "business bay", "canal"],
    "dubai-marina": ["dubai", "marina", "jbr"],
    "jlt": ["dubai", "jlt", "jumeirah lake", "lake towers"],
    "internet-city-media-city": ["dubai", "media city", "internet city"],
    "deira-old-dubai": ["dubai", "creek", "deira", "souk"],
    "dubai-south": ["dubai", "expo", "maktoum"],
}

# Indoor, people and food shots that rarely depict the place itself
NEGATIVE_KEYWORDS: List[str] = [
    "office", "meeting", "laptop", "workspace", "typing", "desk",
    "person", "portrait", "selfie", "food", "plate", "coffee",
    "notebook", "phone", "indoor", "interior", "closeup", "macro",
]

GOOGLE_PLACE_IDS: Dict[str, str] = {
    "saadiyat-island": "ChIJYRsgrvddXj4RHvV3y9oG32E",
    "al-maryah-island": "ChIJ9210VFNmXj4RsXFYDOrNsxw",
    "downtown-corniche": "ChIJFXiv_txlXj4Rxwlz4hvxVck",
    "yas-island": "ChIJFUMXnH1FXj4RjuQ3zzNfor4",
    "al-reem-island": "ChIJ3cx4zb5nXj4RRdOyI77vS60",
    "masdar-city": "ChIJ8fHzaaNIXj4RW84Hcbf8eCw",
    "kizad": "ChIJn0aeqc7-Xj4R4iecR7GPF28",
    "difc": "ChIJTSevApJCXz4Ry6uFtXbgsRo",
    "downtown-dubai": "ChIJS-JnijRDXz4R4rfO4QLlRf8",
    "business-bay": "ChIJV_Ql7y1oXz4RDpVweQnE1D0",
    "dubai-marina": "ChIJX47nvlBrXz4RVW5QiQ0Xvjw",
    "jlt": "ChIJrYFul61sXz4R3D-GuGTkC6g",
    "internet-city-media-city": "ChIJZwjxwkRrXz4RxwvrTkr4urI",
    "deira-old-dubai": "ChIJLTy3FUBDXz4Rhnt9HVVW1vM",
}


def default_queries(slug: str) -> List[str]:
    """Registry queries for a slug, or one derived from the slug itself."""
    if slug in PLACE_QUERIES:
        return list(PLACE_QUERIES[slug])
    return [f"{slug.replace('-', ' ')} UAE"]
