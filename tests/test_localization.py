from storefront.services.localization import LocalizationNormalizer, is_arabic_text


def test_arabic_only_name_is_not_copied_into_english_slot() -> None:
    normalized = LocalizationNormalizer().normalize({"id": 1, "name_ar": "قميص"})

    assert "name_en" not in normalized
    assert normalized["description_en"] == "High quality product. Details coming soon."


def test_generic_fields_fill_matching_language() -> None:
    normalized = LocalizationNormalizer().normalize(
        {"name": "Business Cards", "description": "بطاقات فاخرة"}
    )

    assert normalized["name_en"] == "Business Cards"
    assert "name_ar" not in normalized
    assert normalized["description_ar"] == "بطاقات فاخرة"
    assert "description_en" not in normalized


def test_existing_values_are_never_overwritten() -> None:
    record = {"name": "Generic", "name_en": "Kept", "name_ar": "محفوظ"}
    normalized = LocalizationNormalizer().normalize(record)

    assert normalized["name_en"] == "Kept"
    assert normalized["name_ar"] == "محفوظ"
    assert record == {"name": "Generic", "name_en": "Kept", "name_ar": "محفوظ"}


def test_paired_variant_fills_when_script_matches() -> None:
    normalized = LocalizationNormalizer().normalize({"title_ar": "About", "name_en": "Flyers"})

    assert normalized["title_en"] == "About"
    assert normalized["description_en"] == "High quality Flyers. Details coming soon."


def test_bilingual_mapping_supplies_both_languages() -> None:
    normalized = LocalizationNormalizer().normalize({"name": {"ar": "طباعة", "en": "Printing"}})

    assert normalized["name_ar"] == "طباعة"
    assert normalized["name_en"] == "Printing"


def test_placeholder_can_be_disabled() -> None:
    normalizer = LocalizationNormalizer(fields=("title",), describe=False)
    normalized = normalizer.normalize({"title": "Privacy"})

    assert normalized == {"title": "Privacy", "title_en": "Privacy"}


def test_script_detection() -> None:
    assert is_arabic_text("مرحبا")
    assert not is_arabic_text("hello")
    assert not is_arabic_text(None)
