from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from pix.config import LIMITE_PADRAO


limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[LIMITE_PADRAO]
)
