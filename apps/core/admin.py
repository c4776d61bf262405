from django.contrib import admin
from .models import MasterCatalog

@admin.register(MasterCatalog)
class MasterCatalogAdmin(admin.ModelAdmin):
    list_display = ('category', 'code', 'description', 'num_1', 'is_active')
    list_filter = ('category', 'is_active')
    search_fields = ('code', 'description')
    list_editable = ('is_active',)
