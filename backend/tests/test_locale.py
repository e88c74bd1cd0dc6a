from branch_api.core.locale import resolve_locale, translate


def test_resolve_locale_takes_primary_language():
    assert resolve_locale("ar-SA") == "ar"
    assert resolve_locale("EN-us,en;q=0.9") == "en"


def test_resolve_locale_defaults_for_unknown_or_missing():
    assert resolve_locale("fr-FR") == "ar"
    assert resolve_locale(None) == "ar"
    assert resolve_locale("") == "ar"


def test_translate_fallback_chain():
    values = {"ar": "فرع", "en": "Branch", "fr": "Agence"}
    assert translate(values, "ar") == "فرع"
    assert translate({"en": "Branch", "fr": "Agence"}, "ar") == "Branch"
    assert translate({"fr": "Agence"}, "ar") == "Agence"
    assert translate({}, "ar") is None
    assert translate(None, "en") is None
