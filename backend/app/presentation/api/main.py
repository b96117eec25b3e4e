from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.presentation.api.v1.caption_router import method_not_allowed_handler, router as caption_router


app = FastAPI(title="Caption Generator Backend", version="1.0.0")
app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)

# Enable permissive CORS (allow all origins) so the browser frontend can call us.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root():
    return {"status": "ok", "message": "Caption Generator Backend running"}

app.include_router(caption_router)
