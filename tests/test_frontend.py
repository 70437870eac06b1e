# tests/test_frontend.py
# Streamlit editor driven through streamlit's AppTest with mmdc pointed at a missing binary

import os
import sys

import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)

testing = pytest.importorskip("streamlit.testing.v1")

OLD_PNG = ("Old_topic.png", b"\x89PNG old")


@pytest.fixture
def app(monkeypatch):
    import mermaid_render
    monkeypatch.setattr(mermaid_render, "MMDC_BIN", "mmdc-does-not-exist-here")
    at = testing.AppTest.from_file(os.path.join(ROOT, "frontend.py"), default_timeout=30)
    at.run()
    return at


def _button(at, label):
    return next(b for b in at.button if b.label == label)


class TestExportedPng:
    """Test that a downloaded PNG always matches the current diagram"""

    def _with_png(self, at):
        at.session_state["png"] = OLD_PNG
        at.session_state["png_source"] = (at.session_state["mermaid_code"], at.session_state["topic"])

    def test_load_example_drops_png(self, app):
        """Loading the example discards the previous export"""
        self._with_png(app)
        _button(app, "Load Example").click().run()
        assert app.session_state["png"] is None

    def test_generate_drops_png(self, app, monkeypatch):
        """A new generation discards the previous export"""
        import api_client
        app.text_input[0].input("Cooking pasta").run()
        app.session_state["png"] = OLD_PNG
        app.session_state["png_source"] = ("", "Cooking pasta")

        def fake_post(*args, **kwargs):
            raise api_client.requests.ConnectionError("backend down")
        monkeypatch.setattr(api_client.requests, "post", fake_post)
        _button(app, "Generate").click().run()
        assert app.session_state["png"] is None

    def test_edited_source_drops_png(self, app):
        """Editing the diagram source discards an export of the old source"""
        self._with_png(app)
        app.text_area[0].input("graph TD;\nX-->Y").run()
        assert app.session_state["png"] is None
