# Auth
AUTH_BASE = '/api/auth'
AUTH_REGISTER = f'{AUTH_BASE}/register'
AUTH_LOGIN = f'{AUTH_BASE}/login'

# User
USER_BASE = '/api/users'
USER_ME = f'{USER_BASE}/me'

# Event
EVENT_BASE = '/api/v1/events'
EVENT_MY = f'{EVENT_BASE}/me'
EVENT_BY_ID = f'{EVENT_BASE}/{{event_id}}'
EVENT_STATISTICS = f'{EVENT_BASE}/{{event_id}}/statistics'
EVENT_BY_SHORT_LINK = f'{EVENT_BASE}/s/{{short_link}}'

# Order
ORDER_BASE = '/api/v1/orders'
ORDER_CREATE = f'{ORDER_BASE}/create'
ORDER_SCAN = f'{ORDER_BASE}/scan/{{qr_code}}'

# Upload
UPLOAD_BASE = '/api/v1/upload'
UPLOAD_IMAGE = f'{UPLOAD_BASE}/image'

# Static uploads
UPLOADS_MOUNT = '/uploads'
