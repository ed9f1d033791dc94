"""
Star Registry API Blueprint

Defines the Flask blueprint exposing the star registry chain: chain height,
block lookups, ownership message requests, star submission and chain validation.
"""
import logging

from flask import Blueprint, current_app, jsonify, request

from api_utils.metrics import metrics
from api_utils.validation import require_json_fields
from starledger.chain import Blockchain

star_api = Blueprint('star_api', __name__)
logger = logging.getLogger(__name__)


def _chain() -> Blockchain:
    return current_app.extensions['starledger']


@star_api.route('/height', methods=['GET'])
@metrics
def api_chain_height():
    return jsonify({'height': _chain().get_chain_height()})


@star_api.route('/block/height/<int:height>', methods=['GET'])
@metrics
def api_block_by_height(height):
    block = _chain().get_block_by_height(height)
    if block is None:
        return jsonify({'error': 'Block Not Found!'}), 404
    return jsonify(block.to_dict())


@star_api.route('/block/hash/<block_hash>', methods=['GET'])
@metrics
def api_block_by_hash(block_hash):
    blocks = _chain().get_block_by_hash(block_hash)
    if not blocks:
        return jsonify({'error': 'Block Not Found!'}), 404
    return jsonify({'blocks': [b.to_dict() for b in blocks]})


@star_api.route('/requestValidation', methods=['POST'])
@metrics
@require_json_fields('address')
def api_request_validation():
    """Return the message a wallet must sign to prove ownership."""
    address = request.get_json(force=True)['address']
    message = _chain().request_message_ownership_verification(address)
    logger.info(f"Ownership message issued for {address}")
    return jsonify({'message': message})


@star_api.route('/submitstar', methods=['POST'])
@metrics
@require_json_fields('address', 'message', 'signature', 'star')
def api_submit_star():
    """
    Register a star. Failures surface as a generic 400 via the error handler.
    """
    data = request.get_json(force=True)
    block = _chain().submit_star(data['address'], data['message'], data['signature'], data['star'])
    logger.info(f"Star registered for {data['address']} at height {block.height}")
    return jsonify(block.to_dict())


@star_api.route('/blocks/<address>', methods=['GET'])
@metrics
def api_stars_by_address(address):
    return jsonify({'stars': _chain().get_stars_by_wallet_address(address)})


@star_api.route('/validateChain', methods=['GET'])
@metrics
def api_validate_chain():
    errors = _chain().validate_chain()
    if errors:
        logger.warning(f"Chain validation reported {len(errors)} error(s)")
    return jsonify({'valid': not errors, 'errors': errors})
