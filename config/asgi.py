# ASGI (Asynchronous Server Gateway Interface) configuration

# Production servers:
# - Uvicorn
# - Hypercorn
# ==============================================================================

import os
from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

application = get_asgi_application()
