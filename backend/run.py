import uvicorn
from song_explorer.core.config import settings

if __name__ == "__main__":
    print(f"Starting server on {settings.HOST}:{settings.PORT}")
    print(f"Environment: {settings.ENVIRONMENT}")
    print(f"Debug mode: {settings.DEBUG}")
    print(f"API docs available at: http://{settings.HOST}:{settings.PORT}/docs")

    uvicorn.run(
        "song_explorer.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
        log_config=None,
        access_log=True
    )
