from django.db.models import Count
from django.utils import timezone

from apps.accounts.permissions import Capability, get_profile, has_capability
from apps.inventory.models import InventoryMovement, StockStatus
from apps.inventory.services import StockService
from apps.purchases.models import RequestStatus
from apps.purchases.services import PurchaseRequestService


class DashboardService:
    @staticmethod
    def visible_movements(user):
        movements = InventoryMovement.objects.all()
        if has_capability(user, Capability.VIEW_ALL_REQUESTS) or has_capability(user, Capability.ADJUST_ANY_BRANCH):
            return movements
        profile = get_profile(user)
        if profile is None or profile.branch_id is None:
            return movements.none()
        return movements.filter(branch_id=profile.branch_id)

    @staticmethod
    def summary(user):
        """
        Figures of the home page, limited to what the user can see:
        requests per status, critical stock rows and today's movements.
        """
        requests = PurchaseRequestService.list_requests_for(user)
        by_status = {
            row['status']: row['total']
            for row in requests.order_by().values('status').annotate(total=Count('id'))
        }

        stocks = StockService.stock_overview(user)
        critical = stocks.filter(status_code=StockStatus.CRITICAL)

        movements = DashboardService.visible_movements(user)
        today = timezone.localdate()

        return {
            'requests_by_status': [
                {'status': value, 'label': label, 'total': by_status.get(value, 0)}
                for value, label in RequestStatus.choices
            ],
            'pending_count': by_status.get(RequestStatus.PENDING, 0),
            'approved_count': by_status.get(RequestStatus.APPROVED, 0),
            'critical_count': critical.count(),
            'warning_count': stocks.filter(status_code=StockStatus.WARNING).count(),
            'critical_stocks': list(critical[:10]),
            'movements_today': movements.filter(created_at__date=today).count(),
            'recent_requests': list(requests[:10]),
            'recent_movements': list(
                movements.select_related('branch', 'product', 'user').order_by('-created_at', '-id')[:10]
            ),
        }
