# Test Utility Constants

# Test Passwords
DEFAULT_PASSWORD = 'P@ssw0rd'
WRONG_PASSWORD = 'WrongP@ss'

# Test Emails
TEST_MERCHANT_EMAIL = 'merchant@test.com'
TEST_USER_EMAIL = 'user@test.com'
ANOTHER_USER_EMAIL = 'another_user@test.com'

# Test Names
TEST_MERCHANT_NAME = 'Green Bistro'
TEST_USER_NAME = 'Test User'
ANOTHER_USER_NAME = 'Another User'

# Meal test constants
DEFAULT_MEAL_TITLE = 'Vegetable lasagna'
DEFAULT_PICKUP_TIME = '2030-01-01T19:00:00Z'
