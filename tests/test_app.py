from streamlit.testing.v1 import AppTest


def bottombar_app():
    from ui.bottombar import render_bottombar
    from ui.deal_form import render_deal_form

    render_deal_form()
    render_bottombar()


def test_bottombar_reports_guardrails():
    at = AppTest.from_function(bottombar_app)
    at.run()
    assert next(m for m in at.metric if m.label == "Guardrails").value == "PASS"
    assert next(m for m in at.metric if m.label == "Term").value == "48 mo"


def test_bottombar_opens_dashboard():
    at = AppTest.from_function(bottombar_app)
    at.run()
    at.button(key="open_dashboard").click()
    at.run()
    assert at.session_state["view_mode"] == "Dashboard"


def test_app_navigation():
    at = AppTest.from_file("../app.py", default_timeout=30)
    at.run()
    assert not at.exception
    assert at.title[0].value == "LEASEDESK DEAL CALCULATOR"
    at.sidebar.radio[0].set_value("Dashboard")
    at.run()
    assert not at.exception
    assert any(h.value == "Dashboard" for h in at.header)
