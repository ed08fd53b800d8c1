"""Static hotel dataset around Sacramento, CA, served by the mock provider."""

_UNSPLASH = "https://images.unsplash.com/photo-{}?q=80&w={}&auto=format&fit=crop"


def _photos(*ids: str) -> list[str]:
    return [_UNSPLASH.format(photo_id, 1600) for photo_id in ids]


def _thumb(photo_id: str) -> str:
    return _UNSPLASH.format(photo_id, 1200)


MOCK_HOTELS: list[dict] = [
    {
        "id": "m1", "name": "Riverlake Inn", "lat": 38.493, "lng": -121.517,
        "address": "123 Lakeview Dr", "rating": 4.1, "price_nightly": 129,
        "min_check_in_age": 18,
        "policy_text": "Minimum age to check in is 18 years old.",
        "confidence": "explicit",
        "thumbnail_url": _thumb("1551776235-dde6d4829808"),
        "photos": _photos(
            "1551776235-dde6d4829808",
            "1505691938895-1758d7feb511",
            "1501117716987-c8e1ecb2101f",
            "1522708323590-d24dbb6b0267",
        ),
    },
    {
        "id": "m2", "name": "Downtown Suites", "lat": 38.578, "lng": -121.495,
        "address": "1 Main St", "rating": 4.5, "price_nightly": 179,
        "min_check_in_age": 21,
        "policy_text": "Guests must be 21 to check in.",
        "confidence": "parsed",
        "thumbnail_url": _thumb("1488747279002-c8523379faaa"),
        "photos": _photos(
            "1488747279002-c8523379faaa",
            "1496412705862-e0088f16f791",
            "1542314831-068cd1dbfeeb",
        ),
    },
    {
        "id": "m3", "name": "Campus Lodge", "lat": 38.55, "lng": -121.43,
        "address": "45 College Ave", "rating": 3.8, "price_nightly": 99,
        "min_check_in_age": None,
        "policy_text": None,
        "confidence": "unknown",
        "thumbnail_url": _thumb("1535827841776-24afc1e255ac"),
        "photos": _photos("1535827841776-24afc1e255ac", "1505691938895-1758d7feb511"),
    },
    {
        "id": "m4", "name": "Airport Motel", "lat": 38.561, "lng": -121.444,
        "address": "500 Flight Rd", "rating": 3.2, "price_nightly": 79,
        "min_check_in_age": 18,
        "policy_text": "Minimum age to check in: 18 years.",
        "confidence": "explicit",
        "thumbnail_url": _thumb("1505691723518-36a2a21c4d84"),
        "photos": _photos("1505691723518-36a2a21c4d84", "1528909514045-2fa4ac7a08ba"),
    },
    {
        "id": "m5", "name": "Seaside Bungalows", "lat": 38.49, "lng": -121.48,
        "address": "2 Ocean View", "rating": 4.0, "price_nightly": 209,
        "min_check_in_age": 25,
        "policy_text": "Guests must be 25 to check in unless accompanied by an adult.",
        "confidence": "parsed",
        "thumbnail_url": _thumb("1505691723519-123a3c5f0b4d"),
        "photos": _photos("1505691723519-123a3c5f0b4d", "1505692794405-6d7b6f66b3d2"),
    },
    {
        "id": "m6", "name": "Historic Inn", "lat": 38.59, "lng": -121.52,
        "address": "9 Heritage Sq", "rating": 4.3, "price_nightly": 189,
        "min_check_in_age": 18,
        "policy_text": "18+ with ID required at check-in.",
        "confidence": "explicit",
        "thumbnail_url": _thumb("1483683804023-6ccdb62f86ef"),
        "photos": _photos("1483683804023-6ccdb62f86ef", "1493809842364-78817add7ffb"),
    },
    {
        "id": "m7", "name": "Budget Inn", "lat": 38.57, "lng": -121.46,
        "address": "88 Savings Ln", "rating": 2.9, "price_nightly": 59,
        "min_check_in_age": None,
        "policy_text": "Call property for age policy.",
        "confidence": "unknown",
        "thumbnail_url": _thumb("1505692794400-5c1b8c1d3b58"),
        "photos": _photos("1505692794400-5c1b8c1d3b58", "1526779259212-7d0a0d5f98b3"),
    },
    {
        "id": "m8", "name": "Luxury Resort", "lat": 38.60, "lng": -121.49,
        "address": "1 Grand Ave", "rating": 4.9, "price_nightly": 349,
        "min_check_in_age": 21,
        "policy_text": "Guests must be 21+ to check in.",
        "confidence": "explicit",
        "thumbnail_url": _thumb("1496417263034-38ec4f0b665a"),
        "photos": _photos("1496417263034-38ec4f0b665a", "1505691938895-1758d7feb511"),
    },
    {
        "id": "m9", "name": "Countryside Retreat", "lat": 38.52, "lng": -121.48,
        "address": "77 Meadow Rd", "rating": 4.2, "price_nightly": 139,
        "min_check_in_age": 19,
        "policy_text": "Minimum check-in age is 19.",
        "confidence": "parsed",
        "thumbnail_url": _thumb("1505692794405-6d7b6f66b3d2"),
        "photos": _photos("1505692794405-6d7b6f66b3d2"),
    },
]
