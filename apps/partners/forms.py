from django import forms

from .models import Provider, clean_ruc

INPUT_CLASS = 'w-full px-4 py-4 bg-slate-50 border-2 border-transparent rounded-2xl text-sm font-bold focus:bg-white focus:border-indigo-600 transition-all outline-none'


class ProviderForm(forms.ModelForm):
    def clean_ruc(self):
        ruc = clean_ruc(self.cleaned_data.get('ruc'))
        qs = Provider.objects.filter(ruc=ruc)
        if self.instance.pk:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise forms.ValidationError(f"Ya existe un proveedor registrado con el RUC {ruc}.")
        return ruc

    class Meta:
        model = Provider
        fields = ['ruc', 'name', 'address', 'is_active']
        widgets = {
            'ruc': forms.TextInput(attrs={'class': INPUT_CLASS, 'placeholder': '20123456789', 'maxlength': 11}),
            'name': forms.TextInput(attrs={'class': INPUT_CLASS}),
            'address': forms.TextInput(attrs={'class': INPUT_CLASS}),
            'is_active': forms.CheckboxInput(attrs={'class': 'w-5 h-5 text-indigo-600 bg-white border-slate-300 rounded-lg focus:ring-indigo-600 transition-all'}),
        }
