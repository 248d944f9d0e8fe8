"""Tests for i18n translations"""
from rocketcart.i18n import SUPPORTED_LANGUAGES, detect_language, get_text


def test_get_text_portuguese():
    assert get_text("cart.out_of_stock", "pt") == "Quantidade solicitada fora de estoque"


def test_get_text_regional_code():
    assert get_text("cart.addition_failed", "pt-BR") == "Erro na adição do produto"


def test_get_text_unsupported_language_uses_english():
    assert get_text("cart.invalid_amount", "de") == "Invalid amount"


def test_get_text_missing_key_returns_key():
    assert get_text("cart.no_such_message", "pt") == "cart.no_such_message"


def test_get_text_missing_key_default():
    assert get_text("cart.no_such_message", "pt", default="?") == "?"


def test_get_text_partial_key_returns_key():
    assert get_text("cart", "en") == "cart"


def test_get_text_with_params():
    text = get_text("cart.amount_updated", "en", name="Tênis", amount=3)

    assert text == "Tênis: amount changed to 3"


def test_get_text_with_missing_params():
    assert get_text("cart.product_added", "en", amount=1) == "{name} added to cart"


def test_detect_language():
    assert detect_language("pt_BR") == "pt"
    assert detect_language(None) == "en"
    assert detect_language("ru") == "en"


def test_all_languages_have_cart_messages():
    keys = [
        "cart.out_of_stock",
        "cart.product_not_found",
        "cart.invalid_amount",
        "cart.addition_failed",
        "cart.removal_failed",
        "cart.update_failed",
    ]
    for lang in SUPPORTED_LANGUAGES:
        for key in keys:
            assert get_text(key, lang) != key
