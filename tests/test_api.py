"""End-to-end tests of the internal JSON API."""

from fastapi.testclient import TestClient

from conftest import API_BASE, FixedClock, make_payload


def _photo(n: int = 1, **overrides) -> dict:
    body = {
        "url": f"https://cdn.example.com/{n}.jpg",
        "descricao": f"Foto {n}",
        "categoria": "balcao",
    }
    body.update(overrides)
    return body


def _promotion(priority: int, expiry: str = "2025-06-30") -> dict:
    return {
        "titulo": f"Promoção {priority}",
        "descricao": "Descrição",
        "dataValidade": expiry,
        "prioridade": priority,
        "tipo": "combo",
    }


def _testimonial(rating: int) -> dict:
    return {"nomeCliente": "Ana", "texto": "Adorei o pistache", "avaliacao": rating}


def test_create_sorveteria(client: TestClient):
    response = client.post(API_BASE, json=make_payload())

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["id"] == 1
    assert data["nomeSorveteria"] == "Tommasi Sorvetes"
    assert data["statusFuncionamento"] == "aberto"
    assert data["horariosSemana"]["quarta"] == {
        "abertura": "10:00",
        "fechamento": "22:00",
        "fechado": False,
    }
    assert data["fotosAmbiente"] == []
    assert data["depoimentos"] == []
    assert data["promocoesAtivas"] == []
    assert data["avaliacaoMedia"] is None
    assert data["totalAvaliacoes"] == 0
    assert data["dateCreated"] == data["dateModified"]


def test_get_sorveteria_before_creation(client: TestClient):
    response = client.get(API_BASE)

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": {"code": "NOT_FOUND", "message": "Sorveteria not found"},
    }


def test_get_sorveteria(configured_client: TestClient, clock: FixedClock):
    clock.moment = clock.moment.replace(hour=23)

    response = configured_client.get(API_BASE)

    assert response.status_code == 200
    assert response.json()["data"]["statusFuncionamento"] == "fechado"


def test_create_with_missing_history_terms(client: TestClient):
    history = "Uma sorveteria de bairro com sabores artesanais e origem italiana. " * 4

    response = client.post(API_BASE, json=make_payload(historiaSorveteria=history))

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["message"] == "História deve incluir: tradição, qualidade"
    assert client.get(API_BASE).status_code == 404


def test_create_with_invalid_fields_lists_details(client: TestClient):
    response = client.post(
        API_BASE, json=make_payload(nomeSorveteria="", logotipo="sem-url")
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert {d["field"] for d in error["details"]} >= {"nomeSorveteria", "logotipo"}


def test_create_without_body(client: TestClient):
    response = client.post(API_BASE)

    assert response.status_code == 400
    assert response.json()["error"]["details"][0]["field"] == "body"


def test_patch_updates_only_given_fields(configured_client: TestClient):
    response = configured_client.patch(
        API_BASE, json={"slogan": "Gelato de verdade", "valores": ["Alegria"]}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["slogan"] == "Gelato de verdade"
    assert data["valores"] == ["Alegria"]
    assert data["nomeSorveteria"] == "Tommasi Sorvetes"


def test_patch_before_creation(client: TestClient):
    response = client.patch(API_BASE, json={"slogan": "x"})

    assert response.status_code == 404


def test_patch_rejects_null_required_field(configured_client: TestClient):
    response = configured_client.patch(API_BASE, json={"fundadores": None})

    assert response.status_code == 400
    assert response.json()["error"]["details"][0]["field"] == "fundadores"


class TestPhotoEndpoints:
    def test_add_photo(self, configured_client: TestClient):
        response = configured_client.post(f"{API_BASE}/foto", json=_photo())

        assert response.status_code == 201
        assert response.json()["data"] == {
            "id": 1,
            "url": "https://cdn.example.com/1.jpg",
            "descricao": "Foto 1",
            "categoria": "balcao",
            "ordem": 1,
        }

    def test_photo_limit(self, configured_client: TestClient):
        for n in range(12):
            response = configured_client.post(f"{API_BASE}/foto", json=_photo(n))
            assert response.status_code == 201

        response = configured_client.post(f"{API_BASE}/foto", json=_photo(12))

        assert response.status_code == 400
        assert response.json()["error"] == {
            "code": "LIMIT_EXCEEDED",
            "message": "Maximum of 12 photos allowed",
        }

        assert configured_client.delete(f"{API_BASE}/foto/1").status_code == 200
        response = configured_client.post(f"{API_BASE}/foto", json=_photo(12))
        assert response.status_code == 201
        assert response.json()["data"]["id"] == 13

    def test_delete_photo(self, configured_client: TestClient):
        configured_client.post(f"{API_BASE}/foto", json=_photo())

        response = configured_client.delete(f"{API_BASE}/foto/1")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "data": {"message": "Photo removed successfully"},
        }
        profile = configured_client.get(API_BASE).json()["data"]
        assert profile["fotosAmbiente"] == []

    def test_delete_unknown_photo(self, configured_client: TestClient):
        response = configured_client.delete(f"{API_BASE}/foto/5")

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Photo not found"

    def test_delete_with_invalid_id(self, configured_client: TestClient):
        response = configured_client.delete(f"{API_BASE}/foto/abc")

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid ID"

    def test_add_photo_before_creation(self, client: TestClient):
        response = client.post(f"{API_BASE}/foto", json=_photo())

        assert response.status_code == 404


class TestTestimonialEndpoints:
    def test_submit_testimonial(self, configured_client: TestClient):
        response = configured_client.post(
            f"{API_BASE}/depoimento", json=_testimonial(5)
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["id"] == 1
        assert data["statusModeracao"] == "pendente"
        assert data["nomeCliente"] == "Ana"
        assert "dataCriacao" in data

    def test_moderation_updates_rating(self, configured_client: TestClient):
        for rating in (5, 3):
            configured_client.post(f"{API_BASE}/depoimento", json=_testimonial(rating))

        for testimonial_id in (1, 2):
            response = configured_client.patch(
                f"{API_BASE}/depoimento/{testimonial_id}", json={"status": "aprovado"}
            )
            assert response.status_code == 200
            assert response.json()["data"]["statusModeracao"] == "aprovado"

        data = configured_client.get(API_BASE).json()["data"]
        assert data["avaliacaoMedia"] == 4.0
        assert data["totalAvaliacoes"] == 2

    def test_rating_out_of_range(self, configured_client: TestClient):
        response = configured_client.post(
            f"{API_BASE}/depoimento", json=_testimonial(6)
        )

        assert response.status_code == 400
        assert response.json()["error"]["details"][0]["field"] == "avaliacao"

    def test_moderate_unknown_testimonial(self, configured_client: TestClient):
        response = configured_client.patch(
            f"{API_BASE}/depoimento/3", json={"status": "aprovado"}
        )

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Testimonial not found"

    def test_invalid_moderation_status(self, configured_client: TestClient):
        configured_client.post(f"{API_BASE}/depoimento", json=_testimonial(4))

        response = configured_client.patch(
            f"{API_BASE}/depoimento/1", json={"status": "publicado"}
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid status"


class TestPromotionEndpoints:
    def test_add_promotion(self, configured_client: TestClient):
        response = configured_client.post(f"{API_BASE}/promocao", json=_promotion(1))

        assert response.status_code == 201
        assert response.json()["data"] == {
            "id": 1,
            "titulo": "Promoção 1",
            "descricao": "Descrição",
            "dataValidade": "2025-06-30",
            "prioridade": 1,
            "tipo": "combo",
            "ativa": True,
        }

    def test_priority_conflict(self, configured_client: TestClient):
        configured_client.post(f"{API_BASE}/promocao", json=_promotion(1))

        response = configured_client.post(f"{API_BASE}/promocao", json=_promotion(1))

        assert response.status_code == 400
        assert response.json()["error"] == {
            "code": "PRIORITY_CONFLICT",
            "message": "Only one promotion can have priority 1",
        }

    def test_active_promotion_limit(self, configured_client: TestClient):
        for priority in (2, 3, 4):
            configured_client.post(f"{API_BASE}/promocao", json=_promotion(priority))

        response = configured_client.post(f"{API_BASE}/promocao", json=_promotion(5))

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "LIMIT_EXCEEDED"


class TestMaintenanceEndpoints:
    def test_remove_expired_promotions(
        self, configured_client: TestClient, clock: FixedClock
    ):
        configured_client.post(
            f"{API_BASE}/promocao", json=_promotion(1, expiry="2025-06-17")
        )
        configured_client.post(
            f"{API_BASE}/promocao", json=_promotion(2, expiry="2025-06-18")
        )

        response = configured_client.post(f"{API_BASE}/cron/remove-promocoes")

        assert response.status_code == 200
        assert response.json()["data"] == {
            "message": "Expired promotions removed",
            "removed": 1,
        }
        response = configured_client.post(f"{API_BASE}/promocao", json=_promotion(1))
        assert response.status_code == 201

    def test_remove_expired_promotions_without_profile(self, client: TestClient):
        response = client.post(f"{API_BASE}/cron/remove-promocoes")

        assert response.status_code == 200
        assert response.json()["data"]["removed"] == 0

    def test_update_status(self, configured_client: TestClient, clock: FixedClock):
        clock.moment = clock.moment.replace(hour=22, minute=30)

        response = configured_client.post(f"{API_BASE}/cron/update-status")

        assert response.status_code == 200
        assert response.json()["data"] == {
            "message": "Status updated",
            "status": "fechado",
        }

    def test_update_status_without_profile(self, client: TestClient):
        response = client.post(f"{API_BASE}/cron/update-status")

        assert response.json()["data"]["status"] == "unknown"


def test_health(client: TestClient):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
