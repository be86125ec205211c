import pytest

from factories import (
    ADMIN_ID, DELEGATE_ID, HAWKS_ID, NORTH_CUP_ID, ORGANIZER_ID,
    OTHER_ORGANIZER_ID, SOUTH_LEAGUE_ID, SPECTATOR_ID, TIGERS_ID,
)


def test_list_teams_ordered_by_tournament_then_name(client, db):
    res = client.get("/equipos")
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["total"] == 2
    # Copa Norte sorts before Liga Sur
    assert [t["nombre"] for t in body["data"]] == ["Halcones", "Tigres"]
    tigers = body["data"][1]
    assert tigers["torneo_nombre"] == "Liga Sur"
    assert tigers["torneo_disciplina"] == "basquet"
    assert tigers["torneo_estado"] == "planificado"
    assert tigers["total_jugadores"] == 3


def test_create_team_as_tournament_organizer(client, db, auth_headers):
    res = client.post(
        "/equipos",
        json={"nombre": "Lobos", "torneo_id": NORTH_CUP_ID},
        headers=auth_headers(ORGANIZER_ID),
    )
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["nombre"] == "Lobos"
    assert data["torneo_id"] == NORTH_CUP_ID
    assert data["color"] is None
    assert data["creado_en"] is not None


def test_create_team_same_name_different_case_conflicts(client, db, auth_headers):
    headers = auth_headers(ORGANIZER_ID)
    first = client.post("/equipos", json={"nombre": "Lobos", "torneo_id": NORTH_CUP_ID}, headers=headers)
    assert first.status_code == 201

    second = client.post("/equipos", json={"nombre": "lobos", "torneo_id": NORTH_CUP_ID}, headers=headers)
    assert second.status_code == 409
    assert second.json()["success"] is False


def test_same_name_allowed_in_another_tournament(client, db, auth_headers):
    res = client.post(
        "/equipos",
        json={"nombre": "tigres", "torneo_id": NORTH_CUP_ID},
        headers=auth_headers(ADMIN_ID),
    )
    assert res.status_code == 201


def test_create_team_trims_fields(client, db, auth_headers):
    res = client.post(
        "/equipos",
        json={
            "nombre": "  Pumas  ",
            "color": " azul ",
            "representante": " Juan Perez ",
            "telefono_representante": "",
            "torneo_id": "1",
        },
        headers=auth_headers(DELEGATE_ID),
    )
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["nombre"] == "Pumas"
    assert data["color"] == "azul"
    assert data["representante"] == "Juan Perez"
    assert data["telefono_representante"] is None


def test_create_team_unknown_tournament(client, db, auth_headers):
    res = client.post(
        "/equipos",
        json={"nombre": "Lobos", "torneo_id": 999},
        headers=auth_headers(ADMIN_ID),
    )
    assert res.status_code == 404


def test_create_team_validation_errors_are_collected(client, db, auth_headers):
    res = client.post(
        "/equipos",
        json={"nombre": "A", "color": "x" * 31, "telefono_representante": "abc", "torneo_id": 0},
        headers=auth_headers(ADMIN_ID),
    )
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    fields = {e["field"] for e in body["errors"]}
    assert {"nombre", "color", "telefono_representante", "torneo_id"} <= fields


def test_create_team_requires_token(client, db):
    res = client.post("/equipos", json={"nombre": "Lobos", "torneo_id": NORTH_CUP_ID})
    assert res.status_code == 401


def test_create_team_rejects_role_outside_gate(client, db, auth_headers):
    res = client.post(
        "/equipos",
        json={"nombre": "Lobos", "torneo_id": NORTH_CUP_ID},
        headers=auth_headers(SPECTATOR_ID),
    )
    assert res.status_code == 403


def test_get_team(client, db):
    res = client.get(f"/equipos/{TIGERS_ID}")
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["nombre"] == "Tigres"
    assert data["torneo_organizador_id"] == OTHER_ORGANIZER_ID
    assert data["total_jugadores"] == 3


def test_get_missing_team(client, db):
    assert client.get("/equipos/999").status_code == 404


def test_get_team_invalid_id(client, db):
    assert client.get("/equipos/abc").status_code == 400
    assert client.get("/equipos/0").status_code == 400
    assert client.get("/equipos/-3").status_code == 400


def test_delegate_updates_only_color(client, db, auth_headers):
    res = client.put(f"/equipos/{TIGERS_ID}", json={"color": "red"}, headers=auth_headers(DELEGATE_ID))
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["color"] == "red"
    assert data["nombre"] == "Tigres"
    assert data["representante"] == "Rosa Diaz"
    assert data["telefono_representante"] == "+54 (11) 5555-1234"

    stored = client.get(f"/equipos/{TIGERS_ID}").json()["data"]
    assert stored["color"] == "red"
    assert stored["nombre"] == "Tigres"


def test_update_without_name_keeps_name(client, db, auth_headers):
    res = client.put(
        f"/equipos/{TIGERS_ID}",
        json={"representante": "Carla Ruiz"},
        headers=auth_headers(OTHER_ORGANIZER_ID),
    )
    assert res.status_code == 200
    assert res.json()["data"]["nombre"] == "Tigres"
    assert res.json()["data"]["representante"] == "Carla Ruiz"


def test_update_with_null_clears_nullable_field(client, db, auth_headers):
    res = client.put(f"/equipos/{TIGERS_ID}", json={"color": None}, headers=auth_headers(ADMIN_ID))
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["color"] is None
    assert data["representante"] == "Rosa Diaz"


@pytest.mark.parametrize("phone", ["", None])
def test_update_with_blank_phone_keeps_stored_phone(client, db, auth_headers, phone):
    res = client.put(
        f"/equipos/{TIGERS_ID}",
        json={"telefono_representante": phone, "color": "red"},
        headers=auth_headers(ADMIN_ID),
    )
    assert res.status_code == 200
    assert res.json()["data"]["color"] == "red"
    assert res.json()["data"]["telefono_representante"] == "+54 (11) 5555-1234"

    stored = client.get(f"/equipos/{TIGERS_ID}").json()["data"]
    assert stored["telefono_representante"] == "+54 (11) 5555-1234"


def test_update_without_body_changes_nothing(client, db, auth_headers):
    res = client.put(f"/equipos/{TIGERS_ID}", headers=auth_headers(ADMIN_ID))
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["nombre"] == "Tigres"
    assert data["color"] == "amarillo"
    assert data["telefono_representante"] == "+54 (11) 5555-1234"


def test_update_null_name_is_rejected(client, db, auth_headers):
    res = client.put(f"/equipos/{TIGERS_ID}", json={"nombre": None}, headers=auth_headers(ADMIN_ID))
    assert res.status_code == 400


def test_update_rename_conflict(client, db, auth_headers):
    headers = auth_headers(ADMIN_ID)
    client.post("/equipos", json={"nombre": "Leones", "torneo_id": SOUTH_LEAGUE_ID}, headers=headers)

    res = client.put(f"/equipos/{TIGERS_ID}", json={"nombre": "LEONES"}, headers=headers)
    assert res.status_code == 409


def test_update_own_name_case_change(client, db, auth_headers):
    res = client.put(f"/equipos/{TIGERS_ID}", json={"nombre": "TIGRES"}, headers=auth_headers(ADMIN_ID))
    assert res.status_code == 200
    assert res.json()["data"]["nombre"] == "TIGRES"


def test_update_by_unrelated_organizer_forbidden(client, db, auth_headers):
    res = client.put(f"/equipos/{TIGERS_ID}", json={"color": "verde"}, headers=auth_headers(ORGANIZER_ID))
    assert res.status_code == 403


def test_update_missing_team(client, db, auth_headers):
    res = client.put("/equipos/999", json={"color": "verde"}, headers=auth_headers(ADMIN_ID))
    assert res.status_code == 404


def test_update_invalid_id(client, db, auth_headers):
    res = client.put("/equipos/abc", json={"color": "verde"}, headers=auth_headers(ADMIN_ID))
    assert res.status_code == 400


def test_delete_by_unrelated_organizer_forbidden(client, db, auth_headers):
    res = client.delete(f"/equipos/{TIGERS_ID}", headers=auth_headers(ORGANIZER_ID))
    assert res.status_code == 403
    assert client.get(f"/equipos/{TIGERS_ID}").status_code == 200


def test_delegate_cannot_delete(client, db, auth_headers):
    res = client.delete(f"/equipos/{TIGERS_ID}", headers=auth_headers(DELEGATE_ID))
    assert res.status_code == 403


def test_tournament_organizer_deletes_team_and_players(client, db, auth_headers):
    res = client.delete(f"/equipos/{TIGERS_ID}", headers=auth_headers(OTHER_ORGANIZER_ID))
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "Team deleted successfully"}

    assert client.get(f"/equipos/{TIGERS_ID}").status_code == 404
    assert client.get(f"/equipos/{TIGERS_ID}/jugadores").status_code == 404


def test_admin_deletes_any_team(client, db, auth_headers):
    res = client.delete(f"/equipos/{HAWKS_ID}", headers=auth_headers(ADMIN_ID))
    assert res.status_code == 200


def test_delete_missing_team(client, db, auth_headers):
    res = client.delete("/equipos/999", headers=auth_headers(ADMIN_ID))
    assert res.status_code == 404


def test_delete_requires_token(client, db):
    assert client.delete(f"/equipos/{TIGERS_ID}").status_code == 401


def test_list_players_sorted_by_jersey_number(client, db):
    res = client.get(f"/equipos/{TIGERS_ID}/jugadores")
    assert res.status_code == 200
    body = res.json()
    assert body["total"] == 3
    assert [p["nro_camiseta"] for p in body["data"]] == [1, 7, 10]
    assert body["equipo"] == {"id": TIGERS_ID, "nombre": "Tigres", "torneo": "Liga Sur"}


def test_list_players_of_team_without_players(client, db):
    res = client.get(f"/equipos/{HAWKS_ID}/jugadores")
    assert res.status_code == 200
    assert res.json()["data"] == []
    assert res.json()["total"] == 0


def test_list_players_missing_team(client, db):
    assert client.get("/equipos/999/jugadores").status_code == 404


def test_storage_failure_returns_generic_500(client, db):
    from main import app
    from torneos.repositories.team_repository import TeamRepository
    from torneos.repositories.tournament_repository import TournamentRepository
    from torneos.routes.teams import get_team_service
    from torneos.services.team_service import TeamService
    from torneos.utils.errors import PersistenceError

    class BrokenTeamRepository(TeamRepository):
        async def list_all(self):
            raise PersistenceError("connection reset by peer")

    app.dependency_overrides[get_team_service] = lambda: TeamService(
        BrokenTeamRepository(db), TournamentRepository(db)
    )
    try:
        res = client.get("/equipos")
    finally:
        app.dependency_overrides.clear()

    assert res.status_code == 500
    assert res.json() == {
        "success": False,
        "message": "Error fetching teams",
        "error": "connection reset by peer",
    }
