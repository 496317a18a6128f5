from pathlib import Path
import pytest
from acronyms.engine import AcronymService
from acronyms_web.web import app as flask_app

@pytest.mark.e2e
def test_frontend_home_page_renders(seeded_db: Path):
    svc = AcronymService(path=str(seeded_db)); svc.bootstrap(fetch_if_missing=False)

    import acronyms_web.web as webmod
    webmod._service = svc

    client = flask_app.test_client()
    r = client.get("/")
    assert r.status_code == 200
    html = r.data.decode("utf-8", errors="ignore").lower()
    assert "acronym" in html
    assert "/api/lookup" in html and "/api/refresh" in html

    svc.shutdown()
