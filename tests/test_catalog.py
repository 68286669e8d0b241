import json

from listing_web.catalog import find_property, load_properties


def test_load_properties_accepts_both_field_spellings(tmp_path):
    path = tmp_path / "properties.json"
    path.write_text(
        json.dumps(
            [
                {"id": "p1", "title": "Loft", "image": "/a.jpg", "price": 120, "location": "Lagos",
                 "rating": 4.8, "reviewCount": 12, "type": "Apartment", "beds": 2, "baths": 1, "area": 70,
                 "featured": True},
                {"id": "p2", "title": "Cabin", "imageUrl": "/b.jpg", "price": 80, "address": "Nairobi",
                 "type": "House", "bedrooms": 3, "bathrooms": 2, "area": 110, "amenities": ["wifi"]},
                {"id": "broken", "title": "No price"},
            ]
        ),
        encoding="utf-8",
    )

    props = load_properties(path)
    assert [p.id for p in props] == ["p1", "p2"]
    assert props[0].featured is True
    assert props[0].review_count == 12
    assert props[1].image == "/b.jpg"
    assert props[1].location == "Nairobi"
    assert (props[1].beds, props[1].baths) == (3, 2)
    assert props[1].featured is False

    assert find_property(props, "p2").title == "Cabin"
    assert find_property(props, "nope") is None


def test_missing_file_is_empty_catalog(tmp_path):
    assert load_properties(tmp_path / "absent.json") == []
