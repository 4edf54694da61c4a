from .callbacks import ChatCallback
from .controller import ConversationController

__all__ = ["ChatCallback", "ConversationController"]
