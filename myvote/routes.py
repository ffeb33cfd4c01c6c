# myvote/routes.py

# JSON API over the credential store and the election registry.

from flask import g, jsonify, request
from myvote import app
from myvote.audit.audit_logger import AuditLogger
from myvote.authentication.credential_store import CredentialStore, safe_user
from myvote.authentication.guard import AuthorizationGuard
from myvote.elections.registry import ElectionRegistry
from myvote.encryption.password_hashing import PasswordHashingService
from myvote.security.input_validator import InputValidator
from myvote.security.token_manager import TokenManager

validator = InputValidator()
password_service = PasswordHashingService()
token_manager = TokenManager(app)
audit_logger = AuditLogger(log_dir=app.config['AUDIT_LOG_DIR'])
credential_store = CredentialStore(password_service, token_manager, audit_logger, validator)
guard = AuthorizationGuard(token_manager, credential_store)
election_registry = ElectionRegistry(audit_logger, validator)


def json_body():
    # Missing, malformed or non-object bodies are treated as empty.
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@app.route('/')
def home():
    return 'myVote backend: API running. Use /api/* endpoints.'


@app.route('/api/register', methods=['POST'])
def register():
    user_id = credential_store.register(json_body())
    return jsonify({'message': 'User registered successfully', 'userId': user_id}), 201


@app.route('/api/login', methods=['POST'])
def login():
    data = json_body()
    token = credential_store.authenticate(data.get('identifier'), data.get('password'))
    return jsonify({'message': 'Authenticated', 'token': token})


@app.route('/api/me')
@guard.login_required
def me():
    return jsonify({'user': safe_user(g.current_user)})


@app.route('/api/elections', methods=['POST'])
@guard.login_required
def create_election():
    election = election_registry.create_election(g.current_user, json_body())
    return jsonify({'success': True, 'election': election}), 201


@app.route('/api/elections', methods=['GET'])
def list_elections():
    return jsonify({'elections': election_registry.list_elections()})


@app.route('/api/elections/<election_id>')
def get_election(election_id):
    return jsonify({'election': election_registry.get_election(election_id)})


@app.route('/api/elections/<election_id>/candidates')
def get_candidates(election_id):
    candidates = election_registry.get_candidates(election_id)
    return jsonify({'electionId': election_id, 'candidates': candidates})
