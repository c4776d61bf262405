from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db.models import Q
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render

from apps.accounts.permissions import Capability, capability_required

from .forms import ProviderForm
from .models import Provider


@login_required
def provider_list(request):
    """List providers with optional text search"""
    query = request.GET.get('q', '').strip()
    providers = Provider.objects.all()
    if query:
        providers = providers.filter(Q(name__icontains=query) | Q(ruc__icontains=query))
    return render(request, 'partners/provider_list.html', {'providers': providers, 'query': query})


@login_required
@capability_required(Capability.MANAGE_PROVIDERS)
def provider_create(request):
    form = ProviderForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        provider = form.save()
        messages.success(request, f"Proveedor '{provider.name}' registrado.")
        return redirect('partners:provider_list')
    return render(request, 'partners/provider_form.html', {'form': form})


@login_required
@capability_required(Capability.MANAGE_PROVIDERS)
def provider_edit(request, pk):
    provider = get_object_or_404(Provider, pk=pk)
    form = ProviderForm(request.POST or None, instance=provider)
    if request.method == 'POST' and form.is_valid():
        form.save()
        messages.success(request, f"Proveedor '{provider.name}' actualizado.")
        return redirect('partners:provider_list')
    return render(request, 'partners/provider_form.html', {'form': form, 'provider': provider})


@login_required
def provider_search_api(request):
    """API para búsqueda rápida de proveedores (autocompletado por RUC o nombre)"""
    query = request.GET.get('q', '').strip()
    providers = Provider.objects.filter(is_active=True)
    if query:
        providers = providers.filter(Q(name__icontains=query) | Q(ruc__startswith=query))

    results = [
        {
            'id': p.id,
            'ruc': p.ruc,
            'name': p.name,
            'address': p.address,
            'display': f"{p.name} ({p.ruc})",
        }
        for p in providers.order_by('name')[:15]
    ]
    return JsonResponse({'results': results})
