"""Testes do MatchService: snapshot de elenco e atomicidade"""
import pytest
from sqlalchemy import func, select

from simpleval.core.exceptions import ConflictError, ConsistencyError, NotFoundError, ValidationError
from simpleval.models.match import Match
from simpleval.models.match_participant import MatchParticipant
from simpleval.models.player import Player
from simpleval.services.match_service import TEAM_IDS_IMMUTABLE, MatchService
from simpleval.services.match_validator import MatchValidator

from helpers import PAST, make_team, tomorrow


def count_rows(session, model, **filters):
    query = select(func.count()).select_from(model)
    for key, value in filters.items():
        query = query.filter(getattr(model, key) == value)
    return session.execute(query).scalar()


def roster_ids(session, team_id):
    return list(session.execute(
        select(Player.id).filter(Player.team_id == team_id).order_by(Player.id)
    ).scalars())


@pytest.fixture
def service(db_session):
    return MatchService(db_session)


class TestCreateMatch:
    """Criação de partidas"""

    def test_scored_match_records_ten_participants(self, service, db_session, sentinels, hundred_thieves):
        """Testa snapshot de dez jogadores em partida com placar"""
        match = service.create_match({
            "team_a_id": sentinels.id, "team_b_id": hundred_thieves.id,
            "date": PAST, "team_a_maps_won": 2, "team_b_maps_won": 1,
        })

        assert count_rows(db_session, MatchParticipant, match_id=match.id) == 10
        match = service.get_match(match.id, with_participants=True)
        players = service.get_match_players(match)
        assert [p.team_id for p in players[:5]] == [sentinels.id] * 5
        assert [p.team_id for p in players[5:]] == [hundred_thieves.id] * 5

    def test_snapshot_order_survives_transfer(self, service, db_session, sentinels, hundred_thieves):
        """Transferência posterior não altera nem reordena o snapshot"""
        match = service.create_match({
            "team_a_id": sentinels.id, "team_b_id": hundred_thieves.id,
            "date": PAST, "team_a_maps_won": 2, "team_b_maps_won": 1,
        })
        before = [p.id for p in service.get_match_players(service.get_match(match.id, with_participants=True))]

        moved = db_session.get(Player, roster_ids(db_session, sentinels.id)[0])
        moved.team_id = hundred_thieves.id
        db_session.commit()

        after = [p.id for p in service.get_match_players(service.get_match(match.id, with_participants=True))]
        assert after == before == sorted(before)
        assert moved.id in after

    def test_unscored_match_has_no_participants(self, service, db_session, sentinels, hundred_thieves):
        """Testa partida sem placar sem participantes"""
        match = service.create_match({
            "team_a_id": sentinels.id, "team_b_id": hundred_thieves.id, "date": tomorrow(),
        })
        assert match.id is not None
        assert count_rows(db_session, MatchParticipant, match_id=match.id) == 0

    def test_snapshot_takes_first_players_by_id(self, db_session, sentinels, hundred_thieves):
        """Testa snapshot com os primeiros jogadores por ID"""
        extra = Player(
            in_game_name="sub", real_name="Substitute", country_name="Canada",
            country_flag_code="ca", status="Active", team_id=sentinels.id,
        )
        db_session.add(extra)
        db_session.commit()

        validator = MatchValidator(roster_size=5, roster_rule="at_least")
        service = MatchService(db_session, validator=validator)
        match = service.create_match({
            "team_a_id": sentinels.id, "team_b_id": hundred_thieves.id,
            "date": PAST, "team_a_maps_won": 0, "team_b_maps_won": 2,
        })

        recorded = {p.player_id for p in service.list_participants(match.id)}
        assert extra.id not in recorded
        assert set(roster_ids(db_session, sentinels.id)[:5]) <= recorded

    def test_archived_players_are_not_in_roster(self, service, db_session, sentinels, hundred_thieves):
        """Testa que jogadores arquivados não contam no elenco"""
        player = db_session.get(Player, roster_ids(db_session, sentinels.id)[0])
        player.status = "Archived"
        db_session.commit()

        with pytest.raises(ValidationError):
            service.create_match({
                "team_a_id": sentinels.id, "team_b_id": hundred_thieves.id,
                "date": PAST, "team_a_maps_won": 2, "team_b_maps_won": 0,
            })
        assert count_rows(db_session, Match) == 0

    def test_short_roster_rejected_without_writes(self, service, db_session, sentinels):
        """Testa rejeição de elenco incompleto sem gravação"""
        short = make_team(db_session, "Cloud9", "C9", players=4)

        with pytest.raises(ValidationError) as exc_info:
            service.create_match({
                "team_a_id": sentinels.id, "team_b_id": short.id,
                "date": PAST, "team_a_maps_won": 2, "team_b_maps_won": 1,
            })

        assert exc_info.value.reasons == ["each team must have exactly five players to record a result"]
        assert count_rows(db_session, Match) == 0
        assert count_rows(db_session, MatchParticipant) == 0

    def test_same_team_is_validation_error(self, service, sentinels):
        """Testa partida de um time contra ele mesmo"""
        with pytest.raises(ValidationError):
            service.create_match({"team_a_id": sentinels.id, "team_b_id": sentinels.id, "date": tomorrow()})

    def test_unknown_team(self, service, sentinels):
        """Testa time inexistente"""
        with pytest.raises(NotFoundError):
            service.create_match({"team_a_id": sentinels.id, "team_b_id": 999, "date": tomorrow()})

    def test_failed_snapshot_rolls_back_match(self, service, db_session, sentinels, hundred_thieves, monkeypatch):
        """Testa rollback da partida quando o snapshot falha"""
        def broken_snapshot(match, rosters):
            raise ConsistencyError("snapshot failed")

        monkeypatch.setattr(service, "_snapshot", broken_snapshot)

        with pytest.raises(ConsistencyError):
            service.create_match({
                "team_a_id": sentinels.id, "team_b_id": hundred_thieves.id,
                "date": PAST, "team_a_maps_won": 2, "team_b_maps_won": 1,
            })

        assert count_rows(db_session, Match) == 0
        assert count_rows(db_session, MatchParticipant) == 0


class TestUpdateMatch:
    """Atualização de placar e data"""

    def _scheduled(self, service, sentinels, hundred_thieves, date=PAST):
        return service.create_match({
            "team_a_id": sentinels.id, "team_b_id": hundred_thieves.id, "date": date,
        })

    def test_recording_score_creates_snapshot(self, service, db_session, sentinels, hundred_thieves):
        """Testa snapshot ao registrar placar"""
        match = self._scheduled(service, sentinels, hundred_thieves)

        service.update_match(match.id, {"team_a_maps_won": 1, "team_b_maps_won": 2})

        assert count_rows(db_session, MatchParticipant, match_id=match.id) == 10
        assert service.get_match(match.id).team_b_maps_won == 2

    def test_future_score_rejected(self, service, db_session, sentinels, hundred_thieves):
        """Testa placar em partida futura"""
        match = self._scheduled(service, sentinels, hundred_thieves, date=tomorrow())

        with pytest.raises(ValidationError):
            service.update_match(match.id, {"team_a_maps_won": 1, "team_b_maps_won": 0})

        assert count_rows(db_session, MatchParticipant, match_id=match.id) == 0

    def test_score_correction_keeps_snapshot(self, service, db_session, sentinels, hundred_thieves):
        """Testa correção de placar mantendo o snapshot"""
        match = self._scheduled(service, sentinels, hundred_thieves)
        service.update_match(match.id, {"team_a_maps_won": 1, "team_b_maps_won": 2})

        service.update_match(match.id, {"team_a_maps_won": 2})

        assert count_rows(db_session, MatchParticipant, match_id=match.id) == 10
        assert service.get_match(match.id).team_a_maps_won == 2

    def test_new_score_on_existing_snapshot_conflicts(self, service, db_session, sentinels, hundred_thieves):
        """Testa conflito com snapshot já existente"""
        match = self._scheduled(service, sentinels, hundred_thieves)
        service.add_participant(match.id, roster_ids(db_session, sentinels.id)[0])

        with pytest.raises(ConflictError):
            service.update_match(match.id, {"team_a_maps_won": 2, "team_b_maps_won": 0})

        assert service.get_match(match.id).team_a_maps_won is None
        assert count_rows(db_session, MatchParticipant, match_id=match.id) == 1

    def test_clearing_score(self, service, db_session, sentinels, hundred_thieves):
        """Testa remoção do placar"""
        match = self._scheduled(service, sentinels, hundred_thieves)
        service.update_match(match.id, {"team_a_maps_won": 1, "team_b_maps_won": 2})

        service.update_match(match.id, {"team_a_maps_won": None, "team_b_maps_won": None})

        updated = service.get_match(match.id)
        assert updated.team_a_maps_won is None and updated.team_b_maps_won is None

    def test_clearing_half_the_score_rejected(self, service, sentinels, hundred_thieves):
        """Testa remoção de só metade do placar"""
        match = self._scheduled(service, sentinels, hundred_thieves)
        service.update_match(match.id, {"team_a_maps_won": 1, "team_b_maps_won": 2})

        with pytest.raises(ValidationError):
            service.update_match(match.id, {"team_a_maps_won": None})

    def test_team_ids_cannot_change(self, service, db_session, sentinels, hundred_thieves):
        """Testa imutabilidade dos times"""
        other = make_team(db_session, "Cloud9", "C9")
        match = self._scheduled(service, sentinels, hundred_thieves)

        with pytest.raises(ValidationError) as exc_info:
            service.update_match(match.id, {"team_b_id": other.id})
        assert exc_info.value.reasons == [TEAM_IDS_IMMUTABLE]

        service.update_match(match.id, {"team_a_id": sentinels.id, "date": PAST})

    def test_missing_match(self, service):
        """Testa atualização de partida inexistente"""
        with pytest.raises(NotFoundError):
            service.update_match(404, {"team_a_maps_won": 1, "team_b_maps_won": 0})


class TestDeleteMatch:
    """Remoção de partidas"""

    def test_delete_removes_participants(self, service, db_session, sentinels, hundred_thieves):
        """Testa remoção da partida com participantes"""
        match = service.create_match({
            "team_a_id": sentinels.id, "team_b_id": hundred_thieves.id,
            "date": PAST, "team_a_maps_won": 2, "team_b_maps_won": 0,
        })

        service.delete_match(match.id)

        assert count_rows(db_session, Match) == 0
        assert count_rows(db_session, MatchParticipant) == 0
        # jogadores continuam cadastrados
        assert count_rows(db_session, Player) == 10

    def test_delete_missing_match(self, service):
        """Testa remoção de partida inexistente"""
        with pytest.raises(NotFoundError):
            service.delete_match(12345)


class TestParticipants:
    """Correção manual do snapshot"""

    @pytest.fixture
    def match(self, service, sentinels, hundred_thieves):
        return service.create_match({
            "team_a_id": sentinels.id, "team_b_id": hundred_thieves.id, "date": tomorrow(),
        })

    def test_add_and_get(self, service, db_session, match, sentinels):
        """Testa inclusão e leitura de participante"""
        player_id = roster_ids(db_session, sentinels.id)[0]
        service.add_participant(match.id, player_id)

        participant = service.get_participant(match.id, player_id)
        assert (participant.match_id, participant.player_id) == (match.id, player_id)

    def test_add_twice_conflicts(self, service, db_session, match, sentinels):
        """Testa participante duplicado"""
        player_id = roster_ids(db_session, sentinels.id)[0]
        service.add_participant(match.id, player_id)

        with pytest.raises(ConflictError):
            service.add_participant(match.id, player_id)
        assert count_rows(db_session, MatchParticipant, match_id=match.id) == 1

    def test_add_unknown_ids(self, service, db_session, match, sentinels):
        """Testa IDs inexistentes"""
        with pytest.raises(NotFoundError):
            service.add_participant(match.id, 9999)
        with pytest.raises(NotFoundError):
            service.add_participant(9999, roster_ids(db_session, sentinels.id)[0])

    def test_remove_is_idempotent(self, service, db_session, match, sentinels):
        """Testa remoção idempotente"""
        player_id = roster_ids(db_session, sentinels.id)[0]
        service.add_participant(match.id, player_id)

        assert service.remove_participant(match.id, player_id) == 1
        assert service.remove_participant(match.id, player_id) == 0
        with pytest.raises(NotFoundError):
            service.get_participant(match.id, player_id)

    def test_clear_is_idempotent(self, service, db_session, match, sentinels, hundred_thieves):
        """Testa limpeza idempotente"""
        for player_id in roster_ids(db_session, sentinels.id)[:2] + roster_ids(db_session, hundred_thieves.id)[:1]:
            service.add_participant(match.id, player_id)

        assert service.clear_participants(match.id) == 3
        assert service.clear_participants(match.id) == 0
        assert service.list_participants(match.id) == []
