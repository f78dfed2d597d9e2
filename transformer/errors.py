from typing import Optional


class ShorthandError(ValueError):
    """Base class for shorthand compilation failures"""

    kind = 'shorthand_error'

    def __init__(self, message: str, segment: Optional[str] = None, position: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.segment = segment
        self.position = position

    def to_dict(self) -> dict:
        detail = {'error': self.kind, 'message': self.message}
        if self.segment is not None:
            detail['segment'] = self.segment
        if self.position is not None:
            detail['position'] = self.position
        return detail


class UnknownTypeCode(ShorthandError):
    kind = 'unknown_type_code'

    def __init__(self, type_code: str, segment: Optional[str] = None, position: Optional[int] = None):
        super().__init__(f'Unknown type: {type_code}', segment, position)
        self.type_code = type_code


class MalformedSegment(ShorthandError):
    kind = 'malformed_segment'


class DuplicateColumn(MalformedSegment):
    kind = 'duplicate_column'


class EmptyDefinition(ShorthandError):
    kind = 'empty_definition'

    def __init__(self, message: str = 'No valid column definitions found'):
        super().__init__(message)
