from django import forms

from apps.branches.models import Branch
from apps.products.models import Product

from .models import MovementType

INPUT_CLASS = 'w-full px-4 py-3 bg-slate-50 border border-slate-200 rounded-xl text-slate-900 outline-none focus:ring-4 focus:ring-indigo-500/10 focus:border-indigo-500 transition-all'


class AdjustmentForm(forms.Form):
    """Manual stock adjustment; branch is only shown to roles that pick it"""
    branch = forms.ModelChoiceField(
        queryset=Branch.objects.none(),
        required=False,
        label="Sucursal",
        widget=forms.Select(attrs={'class': INPUT_CLASS})
    )
    product = forms.ModelChoiceField(
        queryset=Product.objects.none(),
        label="Producto",
        widget=forms.Select(attrs={'class': INPUT_CLASS})
    )
    movement_type = forms.ChoiceField(choices=MovementType.choices, label="Tipo",
                                      widget=forms.Select(attrs={'class': INPUT_CLASS}))
    quantity = forms.DecimalField(max_digits=12, decimal_places=4, min_value=0.0001, label="Cantidad",
                                  widget=forms.NumberInput(attrs={'class': INPUT_CLASS, 'step': 'any'}))
    reason = forms.CharField(max_length=255, label="Motivo",
                             widget=forms.TextInput(attrs={'class': INPUT_CLASS}))

    def __init__(self, *args, choose_branch=False, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['product'].queryset = Product.objects.filter(is_active=True).order_by('name')
        if choose_branch:
            self.fields['branch'].queryset = Branch.objects.active().order_by('name')
            self.fields['branch'].required = True
        else:
            del self.fields['branch']


class ThresholdForm(forms.Form):
    min_stock = forms.DecimalField(max_digits=12, decimal_places=4, min_value=0, label="Stock Mínimo")
    reorder_point = forms.DecimalField(max_digits=12, decimal_places=4, min_value=0, label="Punto de Reposición")
