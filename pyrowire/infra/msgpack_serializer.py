from pyrowire.core.models.message import SerializerId
from pyrowire.core.serializer import CodecSerializer
from pyrowire.infra.msgpack_codec import MsgPackCodec


class MsgPackSerializer(CodecSerializer):
    """
    MsgPack based implementation of the Serializer interface.

    - compact binary encoding
    - bytes are carried as-is, without base64
    - sets are received as lists
    """
    serializer_id = SerializerId.MSGPACK

    def __init__(self) -> None:
        super().__init__(MsgPackCodec(), set_literals=False)
