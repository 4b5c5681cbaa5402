"""refbot: git workspace automation and analyzer issue translation for a refactoring bot."""

import logging

# Records stay silent unless the application configures logging (the CLI's --debug does)
logging.getLogger(__name__).addHandler(logging.NullHandler())
