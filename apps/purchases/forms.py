from django import forms

from apps.branches.models import Branch

from .models import Currency

INPUT_CLASS = 'w-full px-4 py-3 bg-slate-50 border border-slate-200 rounded-xl text-slate-900 focus:ring-4 focus:ring-indigo-500/10 focus:border-indigo-500 transition-all'


class PurchaseRequestForm(forms.Form):
    """Datos de cabecera de la solicitud (las cotizaciones llegan como archivos)"""
    branch = forms.ModelChoiceField(
        queryset=Branch.objects.none(),
        label="Sucursal",
        widget=forms.Select(attrs={'class': INPUT_CLASS})
    )
    description = forms.CharField(label="Descripción", widget=forms.Textarea(attrs={'class': INPUT_CLASS, 'rows': 3}))
    estimated_total = forms.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=0.01,
        label="Total Estimado",
        widget=forms.NumberInput(attrs={'class': INPUT_CLASS, 'step': '0.01'})
    )
    currency = forms.ChoiceField(choices=Currency.choices, initial=Currency.PEN, label="Moneda",
                                 widget=forms.Select(attrs={'class': INPUT_CLASS}))
    issue_date = forms.DateField(required=False, label="Fecha de Emisión",
                                 widget=forms.DateInput(attrs={'class': INPUT_CLASS, 'type': 'date'}))

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['branch'].queryset = Branch.objects.active().order_by('name')


class ReceptionForm(forms.Form):
    invoice_id = forms.IntegerField(label="Factura")
    guide_number = forms.CharField(max_length=100, required=False, label="N° Guía de Remisión")
    file_guide = forms.FileField(required=False, label="Guía (PDF)")
    items_json = forms.CharField(widget=forms.HiddenInput)
