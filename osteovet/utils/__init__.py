from osteovet.utils.util import role_required

__all__ = ['role_required']
