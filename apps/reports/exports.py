"""
Inventory Exporter - Stock per branch and movement ledger as CSV / Excel
"""
import csv
import io

import openpyxl
from django.utils import timezone
from openpyxl.styles import Font, PatternFill

from apps.core.services import optional_id
from apps.inventory.services import StockService
from apps.reports.services import DashboardService

STOCK_HEADERS = ['Sucursal', 'Código', 'Producto', 'Unidad', 'Stock Actual', 'Stock Mínimo', 'Punto de Reposición', 'Estado']
MOVEMENT_HEADERS = ['Fecha', 'Hora', 'Sucursal', 'Tipo', 'Concepto', 'Código', 'Producto', 'Cantidad', 'Saldo',
                    'Documento', 'Usuario', 'Motivo']

CRITICAL_FILL = PatternFill(start_color='FEE2E2', end_color='FEE2E2', fill_type='solid')


class InventoryExporter:
    """Export the stock visible to a user"""

    def __init__(self, user, branch_id=None):
        self.user = user
        self.branch_id = optional_id(branch_id)

    def get_stocks(self):
        return StockService.stock_overview(self.user, branch_id=self.branch_id)

    def _stock_row(self, stock):
        return [
            stock.branch.name,
            stock.product.code or '',
            stock.product.name,
            stock.product.unit_measure,
            stock.stock_current,
            stock.min_stock,
            stock.reorder_point,
            stock.status_code,
        ]

    def export_csv(self):
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(STOCK_HEADERS)
        for stock in self.get_stocks():
            writer.writerow(self._stock_row(stock))
        return output.getvalue()

    def export_excel(self):
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "Stock"

        for col, header in enumerate(STOCK_HEADERS, 1):
            ws.cell(row=1, column=col, value=header).font = Font(bold=True)

        for row_num, stock in enumerate(self.get_stocks(), 2):
            for col, value in enumerate(self._stock_row(stock), 1):
                cell = ws.cell(row=row_num, column=col, value=value)
                if stock.is_critical:
                    cell.fill = CRITICAL_FILL

        # Auto-width columns
        for col in ws.columns:
            max_length = max(len(str(cell.value or '')) for cell in col)
            ws.column_dimensions[col[0].column_letter].width = min(max_length + 2, 50)

        output = io.BytesIO()
        wb.save(output)
        return output.getvalue()

    def export_movements_csv(self, days=30):
        start_date = timezone.localdate() - timezone.timedelta(days=days)
        movements = (
            DashboardService.visible_movements(self.user)
            .filter(created_at__date__gte=start_date)
            .select_related('branch', 'product', 'user')
            .order_by('-created_at', '-id')
        )
        if self.branch_id is not None:
            movements = movements.filter(branch_id=self.branch_id)

        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(MOVEMENT_HEADERS)
        for mov in movements:
            created = timezone.localtime(mov.created_at)
            writer.writerow([
                created.strftime('%Y-%m-%d'),
                created.strftime('%H:%M:%S'),
                mov.branch.name,
                mov.get_type_display(),
                mov.get_concept_display(),
                mov.product.code or '',
                mov.product.name,
                mov.quantity,
                mov.balance_after,
                mov.document_number,
                mov.user.username if mov.user else 'Sistema',
                mov.reason,
            ])
        return output.getvalue()
