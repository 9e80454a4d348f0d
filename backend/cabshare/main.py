from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cabshare.api.routes.arrivals import router as arrivals_router
from cabshare.api.routes.health import router as health_router
from cabshare.core.logging_setup import configure_logging_if_needed

configure_logging_if_needed()

app = FastAPI(title="Paris Arrival Cab Share API")

# The arrivals page is served from a separate static host and calls /entries and /search cross-origin.
# No cookies or auth headers are involved, so credentials stay off.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(arrivals_router)
