from django import forms

from apps.core.models import CatalogCategory, MasterCatalog

from .models import Client

INPUT_CLASS = 'w-full px-4 py-3 bg-slate-50 border border-slate-200 rounded-xl text-slate-900 outline-none focus:ring-4 focus:ring-indigo-500/10 focus:border-indigo-500 transition-all'


class ClientForm(forms.ModelForm):
    """Collects the fields; ClientService applies the business rules"""

    class Meta:
        model = Client
        fields = [
            'client_type', 'doc_type', 'doc_number',
            'first_name', 'paternal_surname', 'maternal_surname',
            'business_name', 'trade_name',
            'email', 'phone', 'address',
            'country', 'department', 'province', 'district', 'zip_code',
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        countries = [(c.description, c.description) for c in MasterCatalog.options(CatalogCategory.COUNTRY)]
        if countries:
            self.fields['country'].widget = forms.Select(choices=countries)
        for field in self.fields.values():
            field.widget.attrs.setdefault('class', INPUT_CLASS)

        if self.instance.pk:
            # Type and document are fixed after registration
            for name in ['client_type', 'doc_type', 'doc_number']:
                self.fields[name].disabled = True

    def _post_clean(self):
        # Model validation runs in ClientService
        pass
