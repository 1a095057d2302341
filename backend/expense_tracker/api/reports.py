from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from ..schemas import DailyTotal, ExportRequest, ExportResponse, MonthlyReport
from ..services import ReportService
from .deps import get_report_service

router = APIRouter()


@router.get("/monthly", response_model=MonthlyReport)
def monthly_report(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(...),
    service: ReportService = Depends(get_report_service),
):
    """Category breakdown, grand total and expense list for one month."""
    return service.build_report(month, year)


@router.get("/monthly.csv", response_class=PlainTextResponse)
def monthly_report_csv(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(...),
    service: ReportService = Depends(get_report_service),
):
    """The monthly report rendered as CSV text, for download."""
    text = service.render_csv(service.build_report(month, year))
    filename = f"expenses-{year}-{month:02d}.csv"
    return PlainTextResponse(
        text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/monthly/export", response_model=ExportResponse)
def export_monthly_report(
    data: ExportRequest,
    service: ReportService = Depends(get_report_service),
):
    """Write the monthly CSV to a path on the local machine."""
    success = service.export_csv(data.month, data.year, data.path)
    return ExportResponse(success=success, path=data.path)


@router.get("/daily-trend", response_model=list[DailyTotal])
def daily_trend(
    days: int = Query(7, ge=1, le=366),
    service: ReportService = Depends(get_report_service),
):
    """Spend per day for the trailing window ending today."""
    return service.daily_trend(days=days)
