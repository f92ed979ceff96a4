from app.services.llm.pii import redact_pii


def test_redact_pii_masks_email_phone_and_url():
    text = "I want to teach.\njane.roe@example.com\n+56 9 1234 5678\nhttps://portfolio.example.org/jane"
    redacted = redact_pii(text)

    assert "jane.roe@example.com" not in redacted
    assert "+56 9 1234 5678" not in redacted
    assert "portfolio.example.org" not in redacted
    assert "[EMAIL]" in redacted
    assert "[PHONE]" in redacted
    assert "[URL]" in redacted
    assert redacted.startswith("I want to teach.")


def test_redact_pii_handles_empty_input():
    assert redact_pii(None) == ""
    assert redact_pii("") == ""
