"""
Reports App Views - Dashboard and inventory exports
"""
from django.contrib.auth.decorators import login_required
from django.http import HttpResponse
from django.shortcuts import render
from django.utils import timezone

from apps.branches.models import Branch

from .exports import InventoryExporter
from .services import DashboardService

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def _stamp():
    return timezone.localtime().strftime("%Y%m%d_%H%M")


def _exporter(request):
    return InventoryExporter(request.user, branch_id=request.GET.get('branch') or None)


@login_required
def dashboard(request):
    return render(request, 'reports/dashboard.html', DashboardService.summary(request.user))


@login_required
def export_page(request):
    """Export page with options"""
    return render(request, 'reports/export.html', {'branches': Branch.objects.active().order_by('name')})


@login_required
def export_stock_csv(request):
    response = HttpResponse(_exporter(request).export_csv(), content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="stock_{_stamp()}.csv"'
    return response


@login_required
def export_stock_excel(request):
    response = HttpResponse(_exporter(request).export_excel(), content_type=XLSX_CONTENT_TYPE)
    response['Content-Disposition'] = f'attachment; filename="stock_{_stamp()}.xlsx"'
    return response


@login_required
def export_movements_csv(request):
    try:
        days = max(int(request.GET.get('days', 30)), 1)
    except ValueError:
        days = 30

    content = _exporter(request).export_movements_csv(days=days)
    response = HttpResponse(content, content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="movimientos_{_stamp()}.csv"'
    return response
