# modules/dashboard/routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.connection import get_db
from modules.dashboard import schemas, services
from modules.security.deps import get_current_user

api_router = APIRouter(dependencies=[Depends(get_current_user)])


@api_router.get("/dashboard", response_model=schemas.DashboardView)
def read_dashboard(db: Session = Depends(get_db)):
    return services.dashboard_view(db)
