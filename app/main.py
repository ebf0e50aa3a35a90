import os

from app.config.settings import get_settings
from app.factory import create_app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    port = int(os.getenv("PORT", settings.PORT))
    uvicorn.run(app, host=settings.HOST, port=port)
