from music_library.ipc.router import IpcRouter
from music_library.ipc.auth_handlers import register_auth_handlers
from music_library.ipc.music_handlers import register_music_handlers


def create_router(auth_service, music_service) -> IpcRouter:
    router = IpcRouter()
    register_auth_handlers(router, auth_service)
    register_music_handlers(router, music_service)
    return router


__all__ = ["IpcRouter", "create_router"]
