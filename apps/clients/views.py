"""
Clients App Views
"""
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from apps.accounts.permissions import Capability, capability_required

from .forms import ClientForm
from .models import Client
from .services import ClientService

ITEMS_PER_PAGE = 25


@login_required
def client_list(request):
    query = request.GET.get('q', '')
    clients = ClientService.list_clients(query)
    page_obj = Paginator(clients, ITEMS_PER_PAGE).get_page(request.GET.get('page', 1))

    context = {
        'clients': page_obj,
        'page_obj': page_obj,
        'search_query': query,
    }

    if request.htmx:
        return render(request, 'clients/partials/client_table.html', context)
    return render(request, 'clients/client_list.html', context)


@login_required
@capability_required(Capability.MANAGE_CLIENTS, redirect_to='clients:client_list')
def client_create(request):
    form = ClientForm(request.POST or None)

    if request.method == 'POST' and form.is_valid():
        result = ClientService.create_client(request.user, form.cleaned_data)
        if result:
            messages.success(request, result.message)
            return redirect('clients:client_list')
        messages.error(request, result.message)

    return render(request, 'clients/client_form.html', {'form': form, 'title': 'Nuevo Cliente'})


@login_required
@capability_required(Capability.MANAGE_CLIENTS, redirect_to='clients:client_list')
def client_edit(request, pk):
    client = get_object_or_404(Client.objects.alive(), pk=pk)
    form = ClientForm(request.POST or None, instance=client)

    if request.method == 'POST' and form.is_valid():
        result = ClientService.update_client(request.user, client.pk, form.cleaned_data)
        if result:
            messages.success(request, result.message)
            return redirect('clients:client_list')
        messages.error(request, result.message)

    return render(request, 'clients/client_form.html', {'form': form, 'client': client, 'title': 'Editar Cliente'})


@login_required
@require_POST
@capability_required(Capability.MANAGE_CLIENTS, redirect_to='clients:client_list')
def client_delete(request, pk):
    result = ClientService.delete_client(request.user, pk)
    if result:
        messages.success(request, result.message)
    else:
        messages.error(request, result.message)
    return redirect('clients:client_list')
