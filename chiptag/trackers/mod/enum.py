from enum import IntEnum


class EffectCommandType(IntEnum):
    NORMAL_PLAY_OR_ARPEGGIO          = 0x00
    SLIDE_UP                         = 0x01
    SLIDE_DOWN                       = 0x02
    TONE_PORTAMENTO                  = 0x03
    VIBRATO                          = 0x04
    TONE_PORTAMENTO_AND_VOLUME_SLIDE = 0x05
    VIBRATO_AND_VOLUME_SLIDE         = 0x06
    TREMOLO                          = 0x07
    UNUSED                           = 0x08
    SET_SAMPLE_OFFSET                = 0x09
    VOLUME_SLIDE                     = 0x0a
    POSITION_JUMP                    = 0x0b
    SET_VOLUME                       = 0x0c
    PATTERN_BREAK                    = 0x0d
    EXTENDED_COMMAND                 = 0x0e
    SET_SPEED                        = 0x0f
    # extended commands, the command is in the high nibble of the parameter
    SET_FILTER                       = 0xe0
    FINE_SLIDE_UP                    = 0xe1
    FINE_SLIDE_DOWN                  = 0xe2
    GLISSANDO_CONTROL                = 0xe3
    SET_VIBRATO_WAVEFORM             = 0xe4
    SET_LOOP                         = 0xe5
    JUMP_TO_LOOP                     = 0xe6
    SET_TREMOLO_WAVEFORM             = 0xe7
    UNUSED_EXTENDED                  = 0xe8
    RETRIG_NOTE                      = 0xe9
    FINE_VOLUME_SLIDE_UP             = 0xea
    FINE_VOLUME_SLIDE_DOWN           = 0xeb
    NOTE_CUT                         = 0xec
    NOTE_DELAY                       = 0xed
    PATTERN_DELAY                    = 0xee
    INVERT_LOOP                      = 0xef
