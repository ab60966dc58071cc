from .channels import *
from .guilds import *
from .invites import *
from .messages import *
from .permissions import *
from .webhooks import *
