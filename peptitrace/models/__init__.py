# Base.metadata 에 모든 테이블 등록
from peptitrace.models.user import User, Role, UserStatus  # noqa: F401
from peptitrace.models.peptide import Peptide, PeptideCategory  # noqa: F401
from peptitrace.models.experience import Experience, Lifecycle  # noqa: F401
from peptitrace.models.vote import Vote, VoteType  # noqa: F401
from peptitrace.models.effect import Effect, EffectType, EffectCategory  # noqa: F401
