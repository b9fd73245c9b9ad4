from fastapi import APIRouter, Depends
from savorycircle.modules.setup.schemas import DatabaseCheckResult, AutoSetupResponse
from savorycircle.modules.setup.service import SetupService
from savorycircle.core.dependencies import get_user_supabase
from supabase import Client

router = APIRouter(prefix="/setup", tags=["setup"])


def get_setup_service(supabase: Client = Depends(get_user_supabase)) -> SetupService:
    return SetupService(supabase)


@router.get("/check", response_model=DatabaseCheckResult)
async def check_database(service: SetupService = Depends(get_setup_service)):
    return service.check_database()


@router.post("/auto", response_model=AutoSetupResponse)
async def auto_setup(service: SetupService = Depends(get_setup_service)):
    return service.auto_setup()
