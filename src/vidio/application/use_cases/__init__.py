from .resolve_play_url import ResolvePlayUrlUseCase, normalize_auth_token

__all__ = ["ResolvePlayUrlUseCase", "normalize_auth_token"]
