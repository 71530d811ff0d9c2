from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from accountkit.modules.aws import connect_to_aws, disconnect_from_aws
from accountkit.modules.users.api import user_router, account_router

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: shared AWS clients live for the whole process
    connect_to_aws()
    yield
    # Shutdown
    disconnect_from_aws()

app = FastAPI(title="Accountkit", version="0.1.0", lifespan=lifespan)

# CORS Configuration
origins = [
    "*"
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(user_router)
app.include_router(account_router)

@app.get("/")
async def root():
    return {"status": "online", "system": "Accountkit"}
