"""
Paquete Gateway de SinoPac.

Módulos internos:
- keyring: KeyRing y Credential (rotación de tres llaves)
- digest: cálculo del verifycode y header Authorization
- client: ChallengeResponseClient (máquina de estados de reintentos)
- orders: SinopacGateway y el sobre XML de órdenes ATM/ibon
- redirect: firma del formulario de redirección
"""
from sinopac.gateway.client import Challenge, ChallengeResponseClient, ClientState, parse_challenge
from sinopac.gateway.keyring import Credential, KeyRing
from sinopac.gateway.orders import AtmOrder, GatewayReply, SinopacGateway, build_atm_order_envelope
from sinopac.gateway.redirect import build_redirect_digest, build_redirect_fields


__all__ = [
    'AtmOrder',
    'Challenge',
    'ChallengeResponseClient',
    'ClientState',
    'Credential',
    'GatewayReply',
    'KeyRing',
    'SinopacGateway',
    'build_atm_order_envelope',
    'build_redirect_digest',
    'build_redirect_fields',
    'parse_challenge',
]
