"""
Inventory App Views - Stock per branch, history and manual adjustments
"""
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.db.models import Q
from django.shortcuts import get_object_or_404, redirect, render
from django.utils.dateparse import parse_date
from django.views.decorators.http import require_POST

from apps.accounts.permissions import Capability, capability_required, get_profile, has_capability
from apps.branches.models import Branch

from .forms import AdjustmentForm, ThresholdForm
from .models import InventoryMovement, MovementConcept, ProductStock, StockStatus
from .services import StockService

ITEMS_PER_PAGE = 25


@login_required
def stock_list(request):
    """Stock by branch, critical rows first"""
    query = request.GET.get('q', '').strip()
    branch_id = request.GET.get('branch', '')
    status = request.GET.get('status', '')

    stocks = StockService.stock_overview(request.user, query=query, branch_id=branch_id or None, status=status or None)
    page_obj = Paginator(stocks, ITEMS_PER_PAGE).get_page(request.GET.get('page', 1))

    context = {
        'stocks': page_obj,
        'page_obj': page_obj,
        'branches': Branch.objects.active().order_by('name'),
        'statuses': StockStatus.choices,
        'search_query': query,
        'selected_branch': branch_id,
        'selected_status': status,
        'threshold_form': ThresholdForm(),
    }

    if request.htmx:
        return render(request, 'inventory/partials/stock_table.html', context)
    return render(request, 'inventory/stock_list.html', context)


def _visible_stock(request, stock_id):
    stock = get_object_or_404(ProductStock.objects.select_related('branch', 'product'), pk=stock_id)
    if not (has_capability(request.user, Capability.VIEW_ALL_REQUESTS)
            or has_capability(request.user, Capability.ADJUST_ANY_BRANCH)):
        profile = get_profile(request.user)
        if profile is None or profile.branch_id != stock.branch_id:
            messages.error(request, "Solo puedes consultar el stock de tu sucursal.")
            return None
    return stock


def _date_param(request, key):
    try:
        return parse_date(request.GET.get(key) or '')
    except ValueError:
        return None


@login_required
def product_history(request, stock_id):
    """Kardex of one product in one branch"""
    stock = _visible_stock(request, stock_id)
    if stock is None:
        return redirect('inventory:stock_list')

    start_date = _date_param(request, 'start')
    end_date = _date_param(request, 'end')

    page_obj = StockService.product_history(
        stock.branch_id,
        stock.product_id,
        page=request.GET.get('page', 1),
        start_date=start_date,
        end_date=end_date,
    )

    context = {
        'stock': stock,
        'movements': page_obj,
        'page_obj': page_obj,
        'start': request.GET.get('start', ''),
        'end': request.GET.get('end', ''),
    }

    if request.htmx:
        return render(request, 'inventory/partials/history_table.html', context)
    return render(request, 'inventory/product_history.html', context)


@login_required
@capability_required(Capability.ADJUST_STOCK, redirect_to='inventory:stock_list')
def manual_adjustment(request):
    choose_branch = has_capability(request.user, Capability.ADJUST_ANY_BRANCH)
    form = AdjustmentForm(request.POST or None, choose_branch=choose_branch)

    if request.method == 'POST' and form.is_valid():
        data = form.cleaned_data
        branch = data.get('branch')
        result = StockService.register_adjustment(
            request.user,
            product_id=data['product'].pk,
            quantity=data['quantity'],
            movement_type=data['movement_type'],
            reason=data['reason'],
            branch_id=branch.pk if branch else None,
        )
        if result:
            messages.success(request, result.message)
            return redirect('inventory:stock_list')
        messages.error(request, result.message)

    return render(request, 'inventory/adjustment_form.html', {'form': form})


@login_required
@require_POST
@capability_required(Capability.MANAGE_STOCK_LEVELS, redirect_to='inventory:stock_list')
def update_thresholds(request, stock_id):
    form = ThresholdForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Valores de stock inválidos.")
        return redirect('inventory:stock_list')

    result = StockService.update_thresholds(
        request.user,
        stock_id,
        form.cleaned_data['min_stock'],
        form.cleaned_data['reorder_point'],
    )
    if result:
        messages.success(request, result.message)
    else:
        messages.error(request, result.message)
    return redirect('inventory:stock_list')


@login_required
def movement_list(request):
    """Latest movements visible to the user"""
    movements = InventoryMovement.objects.select_related('branch', 'product', 'user', 'request')

    if not (has_capability(request.user, Capability.VIEW_ALL_REQUESTS)
            or has_capability(request.user, Capability.ADJUST_ANY_BRANCH)):
        profile = get_profile(request.user)
        if profile is None or profile.branch_id is None:
            movements = movements.none()
        else:
            movements = movements.filter(branch_id=profile.branch_id)

    query = request.GET.get('q', '')
    if query:
        movements = movements.filter(
            Q(product__code__icontains=query) |
            Q(product__name__icontains=query) |
            Q(user__username__icontains=query) |
            Q(document_number__icontains=query) |
            Q(reason__icontains=query)
        )
    concept = request.GET.get('concept', '')
    if concept:
        movements = movements.filter(concept=concept)

    return render(request, 'inventory/movement_list.html', {
        'movements': movements[:100],
        'concepts': MovementConcept.choices,
        'selected_concept': concept,
        'search_query': query,
    })
