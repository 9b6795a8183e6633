# Lazy imports to avoid circular dependencies during Django startup
__all__ = [
    "GatewaySettings",
    "SinopacGateway",
    "ChallengeResponseClient",
    "SinopacNotification",
]


def __getattr__(name):
    if name == "GatewaySettings":
        from .config import GatewaySettings
        return GatewaySettings
    elif name == "SinopacGateway":
        from .gateway import SinopacGateway
        return SinopacGateway
    elif name == "ChallengeResponseClient":
        from .gateway import ChallengeResponseClient
        return ChallengeResponseClient
    elif name == "SinopacNotification":
        from .notifications import SinopacNotification
        return SinopacNotification
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
