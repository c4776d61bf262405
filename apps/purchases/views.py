"""
Purchases App Views - Request lifecycle screens
"""
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.http import Http404, JsonResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST

from apps.accounts.permissions import Capability, has_capability

from . import workflow
from .execution import ExecutionService
from .forms import PurchaseRequestForm, ReceptionForm
from .models import DocumentStatus, RequestStatus
from .reception import ReceptionService
from .services import PurchaseRequestService

ITEMS_PER_PAGE = 20


def _visible_request(request, pk):
    purchase = PurchaseRequestService.list_requests_for(request.user).filter(pk=pk).first()
    if purchase is None:
        raise Http404("Solicitud no encontrada")
    return purchase


def _respond(request, result, pk):
    """Turns an ActionResult into a message + redirect (or JSON for fetch calls)"""
    if request.headers.get('X-Requested-With') == 'XMLHttpRequest':
        return JsonResponse(result.as_dict(), status=200 if result else 400)

    if result:
        messages.success(request, result.message)
    else:
        messages.error(request, result.message)
    return redirect('purchases:request_detail', pk=pk)


@login_required
def request_list(request):
    """Bandeja de solicitudes de compra"""
    status = request.GET.get('status', '')
    query = request.GET.get('q', '').strip()

    requests = PurchaseRequestService.list_requests_for(request.user, status=status or None, query=query)
    page_obj = Paginator(requests, ITEMS_PER_PAGE).get_page(request.GET.get('page', 1))

    context = {
        'requests': page_obj,
        'page_obj': page_obj,
        'statuses': RequestStatus.choices,
        'selected_status': status,
        'search_query': query,
    }

    if request.htmx:
        return render(request, 'purchases/partials/request_table.html', context)
    return render(request, 'purchases/request_list.html', context)


@login_required
def request_create(request):
    form = PurchaseRequestForm(request.POST or None)

    if request.method == 'POST' and form.is_valid():
        data = form.cleaned_data
        result = PurchaseRequestService.create_request(
            request.user,
            branch_id=data['branch'].pk,
            description=data['description'],
            estimated_total=data['estimated_total'],
            currency=data['currency'],
            issue_date=data['issue_date'],
            quotation_files=request.FILES.getlist('quotations'),
        )
        if result:
            messages.success(request, result.message)
            return redirect('purchases:request_detail', pk=result.data['request_id'])
        messages.error(request, result.message)

    return render(request, 'purchases/request_form.html', {
        'form': form,
        'currencies': PurchaseRequestService.get_currencies(),
        'title': 'Nueva Solicitud',
    })


@login_required
def request_edit(request, pk):
    purchase = _visible_request(request, pk)
    if purchase.status not in workflow.EDITABLE:
        messages.error(request, "Solicitud no editable")
        return redirect('purchases:request_detail', pk=pk)

    initial = {
        'branch': purchase.branch_id,
        'description': purchase.description,
        'estimated_total': purchase.estimated_total,
        'currency': purchase.currency,
        'issue_date': purchase.issue_date,
    }
    form = PurchaseRequestForm(request.POST or None, initial=initial)

    if request.method == 'POST' and form.is_valid():
        data = form.cleaned_data
        result = PurchaseRequestService.update_request(
            request.user,
            request_id=pk,
            branch_id=data['branch'].pk,
            description=data['description'],
            estimated_total=data['estimated_total'],
            currency=data['currency'],
            new_files=request.FILES.getlist('quotations'),
            deleted_quotation_ids=request.POST.getlist('deleted_file_ids'),
        )
        return _respond(request, result, pk)

    return render(request, 'purchases/request_form.html', {
        'form': form,
        'purchase': purchase,
        'quotations': purchase.quotations.all(),
        'title': f'Editar {purchase.number}',
    })


@login_required
def request_detail(request, pk):
    """Expediente: cabecera, cotizaciones, ejecución y recepciones"""
    purchase = _visible_request(request, pk)
    details = PurchaseRequestService.get_request_details(pk)

    return render(request, 'purchases/request_detail.html', {
        'purchase': purchase,
        'quotations': details['quotations'],
        'invoices': ExecutionService.get_execution_details(pk),
        'receivable_invoices': ExecutionService.get_request_invoices(pk),
        'receptions': ReceptionService.get_request_receptions(pk),
        'pending_documents': PurchaseRequestService.pending_documents(purchase),
        'reception_form': ReceptionForm(),
        'is_editable': purchase.status in workflow.EDITABLE,
        'is_executable': purchase.status in workflow.EXECUTABLE,
        'is_receivable': purchase.status in workflow.RECEIVABLE,
        'is_closable': purchase.status in workflow.CLOSABLE,
        'is_terminal': workflow.is_terminal(purchase.status),
        'DocumentStatus': DocumentStatus,
    })


# ============ WORKFLOW ACTIONS ============

@login_required
@require_POST
def request_approve(request, pk):
    result = PurchaseRequestService.approve_request(
        request.user,
        pk,
        comment=request.POST.get('comment', ''),
        selected_quotation_id=request.POST.get('selected_quotation_id') or None,
    )
    return _respond(request, result, pk)


@login_required
@require_POST
def request_reject(request, pk):
    result = PurchaseRequestService.reject_request(request.user, pk, request.POST.get('reason', ''))
    return _respond(request, result, pk)


@login_required
@require_POST
def request_complete(request, pk):
    result = PurchaseRequestService.complete_purchase(
        request.user, pk, purchased=request.POST.get('purchased') == '1'
    )
    return _respond(request, result, pk)


@login_required
@require_POST
def request_close(request, pk):
    result = PurchaseRequestService.validate_purchase_order(request.user, pk)
    return _respond(request, result, pk)


@login_required
@require_POST
def execution_register(request, pk):
    result = ExecutionService.register_execution(
        request.user,
        pk,
        payload=request.POST.get('data', ''),
        files=request.FILES,
    )
    return _respond(request, result, pk)


@login_required
@require_POST
def document_validate(request, pk, doc_type, doc_id):
    result = ExecutionService.validate_document(
        request.user,
        doc_type.upper(),
        doc_id,
        request.POST.get('status', ''),
        request.POST.get('observation', ''),
    )
    return _respond(request, result, pk)


@login_required
@require_POST
def document_delete(request, pk, doc_type, doc_id):
    result = ExecutionService.delete_document(request.user, doc_type.upper(), doc_id)
    return _respond(request, result, pk)


@login_required
@require_POST
def reception_register(request, pk):
    result = ReceptionService.register_reception(
        request.user,
        pk,
        invoice_id=request.POST.get('invoice_id'),
        items=request.POST.get('items_json', ''),
        guide_number=request.POST.get('guide_number', ''),
        guide_file=request.FILES.get('file_guide'),
    )
    return _respond(request, result, pk)


# ============== API HELPERS ==============

@login_required
def request_invoices_api(request, pk):
    """Facturas disponibles para recepción (JSON)"""
    _visible_request(request, pk)
    return JsonResponse({'results': ExecutionService.get_request_invoices(pk)})


@login_required
def lookups_api(request):
    """Sucursales y monedas para formularios dinámicos"""
    branches = [{'id': b.id, 'name': b.name} for b in PurchaseRequestService.get_branches()]
    return JsonResponse({
        'branches': branches,
        'currencies': PurchaseRequestService.get_currencies(),
        'can_approve': has_capability(request.user, Capability.APPROVE_REQUEST),
    })
