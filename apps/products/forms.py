from django import forms

from apps.core.models import MasterCatalog

INPUT_CLASS = 'w-full px-4 py-3 bg-slate-50 border border-slate-200 rounded-xl text-slate-900 focus:ring-4 focus:ring-indigo-500/10 focus:border-indigo-500 transition-all font-bold'


class ProductForm(forms.Form):
    """Formulario de alta de producto (el código se genera solo)"""
    name = forms.CharField(max_length=255, label="Nombre", widget=forms.TextInput(attrs={'class': INPUT_CLASS}))
    unit_measure = forms.ChoiceField(label="Unidad de Medida", widget=forms.Select(attrs={'class': INPUT_CLASS}))
    description = forms.CharField(
        required=False,
        label="Descripción",
        widget=forms.Textarea(attrs={'class': INPUT_CLASS, 'rows': 3})
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['unit_measure'].choices = [
            (unit['code'], unit['description']) for unit in MasterCatalog.unit_measures()
        ]
