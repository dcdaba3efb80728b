"""Testes da verificação de integridade"""
from simpleval.core.data_integrity import DataIntegrityChecker
from simpleval.models.match import Match
from simpleval.models.match_participant import MatchParticipant
from simpleval.services.match_service import MatchService

from helpers import PAST


def test_clean_database(db_session, sentinels, hundred_thieves):
    """Testa banco consistente"""
    MatchService(db_session).create_match({
        "team_a_id": sentinels.id, "team_b_id": hundred_thieves.id,
        "date": PAST, "team_a_maps_won": 2, "team_b_maps_won": 1,
    })

    report = DataIntegrityChecker(db_session).check_data_consistency()

    assert report["status"] == "ok"
    assert report["issues_found"] == 0


def test_partial_snapshot_is_reported(db_session, sentinels, hundred_thieves):
    """Testa detecção de snapshot incompleto"""
    match = MatchService(db_session).create_match({
        "team_a_id": sentinels.id, "team_b_id": hundred_thieves.id,
        "date": PAST, "team_a_maps_won": 2, "team_b_maps_won": 1,
    })
    participant = db_session.query(MatchParticipant).filter_by(match_id=match.id).first()
    db_session.delete(participant)
    db_session.commit()

    report = DataIntegrityChecker(db_session).check_data_consistency()

    assert report["status"] == "issues_found"
    assert report["issues"] == [
        f"Partida {match.id}: Snapshot incompleto: 9 participantes (esperado 0 ou 10)"
    ]


def test_validate_match_rules():
    """Testa regras de integridade de uma partida"""
    checker = DataIntegrityChecker(db=None, snapshot_size=5)
    base = dict(team_a_id=1, team_b_id=2, date=PAST)

    assert checker.validate_match(Match(**base), 0) == (True, None)
    assert checker.validate_match(Match(**base, team_a_maps_won=2, team_b_maps_won=0), 10) == (True, None)
    assert not checker.validate_match(Match(**base, team_a_maps_won=2), 0)[0]
    assert not checker.validate_match(Match(**base, team_a_maps_won=9, team_b_maps_won=0), 10)[0]
    assert not checker.validate_match(Match(team_a_id=1, team_b_id=1, date=PAST), 0)[0]


def test_endpoint(client, sentinels):
    """Testa endpoint de verificação"""
    response = client.get("/data-integrity/check")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
