from packslip.settings import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        # Clear any PACKSLIP_ env vars that might interfere
        import os

        for key in list(os.environ):
            if key.startswith("PACKSLIP_"):
                monkeypatch.delenv(key, raising=False)
        s = Settings(_env_file=None)
        assert s.upi_id == ""
        assert s.upi_payee_name == ""
        assert s.storage_backend == "local"
        assert s.storage_prefix == ""
        assert s.storage_local_path == "./slips"
        assert s.counter_path == "./slips/counter.json"
        assert s.log_level == "INFO"
        assert s.log_json is False

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PACKSLIP_UPI_ID", "merchant@bank")
        monkeypatch.setenv("PACKSLIP_UPI_PAYEE_NAME", "Akshay Fabrics")
        monkeypatch.setenv("PACKSLIP_LOG_JSON", "true")
        s = Settings(_env_file=None)
        assert s.upi_id == "merchant@bank"
        assert s.upi_payee_name == "Akshay Fabrics"
        assert s.log_json is True

    def test_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("PACKSLIP_MERCHANT_NAME", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("PACKSLIP_MERCHANT_NAME=Akshay Fabrics\n")
        s = Settings(_env_file=str(env_file))
        assert s.merchant_name == "Akshay Fabrics"
