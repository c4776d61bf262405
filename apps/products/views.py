"""
Products App Views - Product catalog
"""
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.db.models import Q
from django.http import JsonResponse
from django.shortcuts import redirect, render

from apps.accounts.permissions import Capability, capability_required

from .forms import ProductForm
from .models import Product
from .services import ProductService

ITEMS_PER_PAGE = 25


@login_required
def product_list(request):
    """Lista de productos con paginación y búsqueda"""
    products = Product.objects.select_related('created_by').order_by('-created_at')

    query = request.GET.get('q', '').strip()
    status = request.GET.get('status', 'active')

    if query:
        products = products.filter(Q(code__icontains=query) | Q(name__icontains=query))
    if status == 'active':
        products = products.filter(is_active=True)
    elif status == 'inactive':
        products = products.filter(is_active=False)

    paginator = Paginator(products, ITEMS_PER_PAGE)
    page_obj = paginator.get_page(request.GET.get('page', 1))

    return render(request, 'products/product_list.html', {
        'products': page_obj,
        'page_obj': page_obj,
        'search_query': query,
        'status': status,
    })


@login_required
@capability_required(Capability.CREATE_PRODUCT, redirect_to='products:product_list')
def product_create(request):
    """Crear nuevo producto"""
    form = ProductForm(request.POST or None)

    if request.method == 'POST' and form.is_valid():
        result = ProductService.create_product(request.user, **form.cleaned_data)
        if result:
            messages.success(request, result.message)
            return redirect('products:product_list')
        messages.error(request, result.message)

    return render(request, 'products/product_form.html', {'form': form, 'title': 'Nuevo Producto'})


# ============== API HELPERS ==============

@login_required
def product_search_api(request):
    """API para búsqueda rápida de productos (autocompletado)"""
    results = [
        {
            'id': p.id,
            'code': p.code,
            'name': p.name,
            'unit_measure': p.unit_measure,
            'display': f"{p.name} ({p.code})",
        }
        for p in ProductService.search(request.GET.get('q', ''))
    ]
    return JsonResponse({'results': results})
