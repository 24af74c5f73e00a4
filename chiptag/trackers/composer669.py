'''
# 669 format

Composer 669 modules ("if") and the UNIS 669 variant ("JN"): three lines of
comment, the counters and three tables of 128 entries (orders, tempos and
breaks of each pattern).
'''
from .. import fields
from ..core import Chunk


MAGICS = (b'if', b'JN')

COMMENT_LINE = 36


class Composer669File(Chunk):
    magic          = fields.StringField(2, default=b'if')
    comment        = fields.StringField(3 * COMMENT_LINE)
    total_samples  = fields.StructField('B')
    total_patterns = fields.StructField('B')
    loop_order     = fields.StructField('B')
    orders         = fields.ArrayField(fields.StructField('B'), n=128)
    tempos         = fields.ArrayField(fields.StructField('B'), n=128)
    breaks         = fields.ArrayField(fields.StructField('B'), n=128)

    def validate(self):
        return self.magic.value in MAGICS

    @property
    def comment_lines(self):
        '''The three lines of the comment, each one padded to 36 characters.'''
        raw = self.comment.value

        return [
            raw[start:start + COMMENT_LINE].split(b'\x00', 1)[0].decode('latin-1').rstrip()
            for start in range(0, len(raw), COMMENT_LINE)
        ]
