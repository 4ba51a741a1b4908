from unittest.mock import patch

from packslip.share import build_whatsapp_url, normalize_phone


class TestNormalizePhone:
    def test_ten_digits_get_country_code(self):
        assert normalize_phone("9820116595") == "919820116595"

    def test_strips_formatting(self):
        assert normalize_phone("98201 16595") == "919820116595"

    def test_leading_zero_dropped(self):
        assert normalize_phone("09820116595") == "919820116595"

    def test_already_international(self):
        assert normalize_phone("+91 98201 16595") == "919820116595"

    def test_short_number_unchanged(self):
        assert normalize_phone("12345") == "12345"

    def test_empty(self):
        assert normalize_phone("") == ""


class TestBuildWhatsappUrl:
    def test_with_message(self):
        url = build_whatsapp_url("9820116595", "Your slip")
        assert url == "https://wa.me/919820116595?text=Your%20slip"

    @patch("packslip.share.settings")
    def test_default_message(self, mock_settings):
        mock_settings.share_message = "Please find your slip attached."
        url = build_whatsapp_url("9820116595")
        assert url == "https://wa.me/919820116595?text=Please%20find%20your%20slip%20attached."

    def test_empty_number(self):
        assert build_whatsapp_url("") is None

    def test_no_digits(self):
        assert build_whatsapp_url("abc") is None
