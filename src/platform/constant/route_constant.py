# API Route Constants

# Service routes
ROOT = '/'
HEALTH = '/health'
METRICS = '/metrics'

# User routes
USER_REGISTER = '/register'
USER_LOGIN = '/login'

# Meal routes
MEAL_BASE = '/meals'
MEAL_CREATE = MEAL_BASE
MEAL_LIST = MEAL_BASE
MEAL_GET = f'{MEAL_BASE}/{{meal_id}}'
MEAL_RESERVE = f'{MEAL_BASE}/{{meal_id}}/reserve'
