from frontend.utils.theme import line_item_html, signature_block


def test_signature_block_escapes_report_text():
    html = signature_block("Doctor's Signature", "Pujar & Sons <Hospital>", "Thank you <b>", "#e2e8f0")
    assert "Doctor&#x27;s Signature" in html
    assert "Pujar &amp; Sons &lt;Hospital&gt;" in html
    assert "Thank you &lt;b&gt;" in html
    assert "<b>" not in html
    assert "1px solid #e2e8f0" in html


def test_line_item_html_omits_empty_variant():
    assert "line-variant" not in line_item_html("ESR", "", "₹200")
    assert "(Standard)" in line_item_html("CBC", "Standard", "₹300")
