# myvote/elections/registry.py

import logging
import uuid
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from myvote import db
from myvote.database.models import Candidate, Election
from myvote.errors import InternalError, NotFound, Unauthorized

logger = logging.getLogger(__name__)

MAX_ID_ATTEMPTS = 6
SHORT_ID_LENGTH = 10


def generate_short_id():
    return uuid.uuid4().hex[:SHORT_ID_LENGTH]


def _iso(value):
    return value.isoformat() if value is not None else None


def election_summary(election):
    return {
        'id': election.id,
        'companyName': election.company_name,
        'totalSeats': election.total_seats,
        'start_ts': election.start_ts,
        'end_ts': election.end_ts,
        'description': election.description,
    }


def candidate_summary(candidate):
    return {
        'id': candidate.id,
        'name': candidate.name,
        'description': candidate.description,
        'party': candidate.party or '',
        'manifesto': candidate.manifesto or '',
    }


def election_detail(election):
    detail = election_summary(election)
    detail.update({
        'eligibility': election.eligibility,
        'publish': bool(election.publish),
        'created_by': election.created_by,
        'created_at': _iso(election.created_at),
        'candidates': [
            dict(candidate_summary(c), votes=c.votes) for c in election.candidates
        ],
    })
    return detail


class ElectionRegistry:
    """Owns elections and their candidate rosters.

    Elections are created once, together with their candidates, and never
    modified afterwards. Short ids are probabilistically unique: a collision
    is retried, and allocation gives up after MAX_ID_ATTEMPTS.
    """

    def __init__(self, audit_logger, validator, id_generator=generate_short_id):
        self.audit_logger = audit_logger
        self.validator = validator
        self.id_generator = id_generator

    def create_election(self, caller, payload):
        if caller is None:
            raise Unauthorized('Missing or invalid token')
        fields = self.validator.validate_election(payload)
        candidates = fields.pop('candidates')

        for attempt in range(1, MAX_ID_ATTEMPTS + 1):
            election_id = self.id_generator()
            if db.session.get(Election, election_id) is not None:
                logger.warning("Election id collision on %s (attempt %d)", election_id, attempt)
                continue

            election = Election(id=election_id, created_by=caller.id, **fields)
            election.candidates = [
                Candidate(id=str(uuid.uuid4()), position=position, votes=0, **candidate)
                for position, candidate in enumerate(candidates)
            ]
            db.session.add(election)
            try:
                db.session.commit()
            except IntegrityError as e:
                # Another writer took the id between the check and the insert.
                db.session.rollback()
                logger.warning("Election id %s rejected on insert (attempt %d): %s", election_id, attempt, e.orig)
                continue
            except SQLAlchemyError as e:
                db.session.rollback()
                logger.error("Could not save election: %s", e, exc_info=True)
                raise InternalError('Could not save election') from e

            self.audit_logger.log_security_event(
                'election_created', {'election_id': election_id}, user_id=caller.id
            )
            return election_detail(election)

        logger.error("Gave up allocating an election id after %d attempts", MAX_ID_ATTEMPTS)
        raise InternalError('Could not allocate unique election id')

    def list_elections(self):
        elections = db.session.query(Election).order_by(Election.created_at, Election.id).all()
        return [election_summary(e) for e in elections]

    def _get_or_404(self, election_id):
        election = db.session.get(Election, election_id)
        if election is None:
            raise NotFound('Election not found')
        return election

    def get_election(self, election_id):
        return election_detail(self._get_or_404(election_id))

    def get_candidates(self, election_id):
        election = self._get_or_404(election_id)
        return [candidate_summary(c) for c in election.candidates]
