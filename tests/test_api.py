from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from retail_dashboard.core.db.models import Inventory, Product, Sale
from retail_dashboard.modules.dashboard import service as dashboard_service

NOW = datetime(2026, 10, 19, 12, 0, 0)


@pytest.fixture(autouse=True)
def fixed_clock(monkeypatch):
    monkeypatch.setattr(dashboard_service, "local_now", lambda: NOW)


@pytest.fixture
def stocked(seed, world):
    rice, beans = seed(
        Product(organization_id=world.org.id, name="Arroz", sku="ARR-1"),
        Product(organization_id=world.org.id, name="Frejol", sku="FRE-1"),
    )
    seed(
        Inventory(product_id=rice.id, location_id=world.store.id, quantity=4),
        Inventory(product_id=beans.id, location_id=world.store.id, quantity=40),
    )
    seed(
        Sale(
            organization_id=world.org.id,
            location_id=world.store.id,
            profile_id=world.cashier.id,
            total=Decimal("25.50"),
            payment_method="qr",
            created_at=NOW - timedelta(hours=2),
        ),
        Sale(
            organization_id=world.org.id,
            location_id=world.store.id,
            profile_id=world.cashier.id,
            total=Decimal("10.00"),
            payment_method="cash",
            customer_name="Carlos",
            created_at=NOW - timedelta(hours=1),
        ),
    )
    return world


def test_dashboard_requires_credentials(client, world):
    response = client.get("/api/dashboard")

    assert response.status_code == 401


def test_dashboard_rejects_invalid_token(client, world):
    response = client.get("/api/dashboard", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401


def test_dashboard_rejects_expired_token(client, world, token_for):
    token = token_for(world.cashier, expires_delta=timedelta(minutes=-5))

    response = client.get("/api/dashboard", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_dashboard_requires_an_organization(client, world, auth_headers):
    response = client.get("/api/dashboard", headers=auth_headers(world.newcomer))

    assert response.status_code == 403
    assert response.json()["detail"] == "Profile is not linked to an organization"


def test_dashboard_returns_wrapped_metrics(client, stocked, auth_headers):
    response = client.get("/api/dashboard", headers=auth_headers(stocked.cashier))

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True

    data = body["data"]
    stats = data["dashboard"]["stats"]
    assert stats["total_products"] == 2
    assert stats["total_stock"] == 44
    assert stats["sales_today_count"] == 2
    assert stats["low_stock_count"] == 1
    assert data["dashboard"]["organization_id"] == stocked.org.id
    assert data["dashboard"]["unavailable"] == []

    assert [card["value"] for card in data["cards"]] == ["2", "44", "Bs 35.50", "1"]
    assert data["low_stock_rows"][0]["product_name"] == "Arroz"
    assert [row["customer_name"] for row in data["recent_sale_rows"]] == [
        "Carlos",
        "Venta directa",
    ]


def test_dashboard_is_scoped_to_the_viewer_organization(client, stocked, auth_headers):
    response = client.get("/api/dashboard", headers=auth_headers(stocked.other_cashier))

    stats = response.json()["data"]["dashboard"]["stats"]
    assert stats["total_products"] == 0
    assert stats["total_stock"] == 0
    assert stats["sales_today_count"] == 0


def test_dashboard_page_renders_cards_and_lists(client, stocked, auth_headers):
    response = client.get("/dashboard", headers=auth_headers(stocked.cashier))

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    page = response.text
    assert "Ventas Hoy" in page
    assert "Bs 35.50" in page
    assert "ARR-1" in page
    assert "Carlos" in page
    assert "Requieren atención" in page


def test_dashboard_page_accepts_cookie_token(client, stocked, token_for):
    client.cookies.set("access_token", token_for(stocked.cashier))

    response = client.get("/dashboard")

    assert response.status_code == 200
    assert "Resumen general de tu negocio" in response.text


def test_dashboard_page_explains_missing_login(client, world):
    response = client.get("/dashboard")

    assert response.status_code == 401
    assert "Inicia sesión" in response.text


def test_dashboard_page_explains_missing_organization(client, world, auth_headers):
    response = client.get("/dashboard", headers=auth_headers(world.newcomer))

    assert response.status_code == 403
    assert "Sin organización" in response.text


def test_profile_me_reports_viewer_state(client, world, auth_headers):
    anonymous = client.get("/api/profiles/me").json()["data"]
    member = client.get("/api/profiles/me", headers=auth_headers(world.cashier)).json()["data"]
    newcomer = client.get("/api/profiles/me", headers=auth_headers(world.newcomer)).json()["data"]

    assert anonymous == {"state": "unauthenticated", "profile": None, "organization_id": None}
    assert member["state"] == "authenticated"
    assert member["organization_id"] == world.org.id
    assert member["profile"]["full_name"] == "Ana Pérez"
    assert newcomer["state"] == "no_organization"
    assert newcomer["organization_id"] is None


def test_health_is_not_wrapped(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": True}


def test_dashboard_page_reports_failed_lists(client, stocked, auth_headers, monkeypatch):
    async def _broken(session_factory, organization_id):
        raise RuntimeError("database is locked")

    monkeypatch.setattr(dashboard_service.DashboardService, "_recent_sales", staticmethod(_broken))
    monkeypatch.setattr(dashboard_service.DashboardService, "_low_stock_items", staticmethod(_broken))

    response = client.get("/dashboard", headers=auth_headers(stocked.cashier))

    assert response.status_code == 200
    page = response.text
    assert "No se pudo cargar" in page
    assert "No hay ventas registradas" not in page
    assert "No hay productos con stock bajo" not in page
    assert "Ventas Hoy" in page
    assert "Bs 35.50" in page
