"""Tests for the receipt command factories and ReceiptCommandBuilder."""

import asyncio
import json

import pytest

from qikpos import PLACEHOLDER, create_invoice
from qikpos.builders import receipt
from qikpos.builders.receipt import ReceiptCommandBuilder
from qikpos.exceptions import CommandValidationError, ImageResolutionError

from conftest import FakeImageSource


class TestCommandFactories:
    def test_simple_commands(self):
        assert receipt.initialize() == {"cmd": "Initialize"}
        assert receipt.print_line("Hola") == {"cmd": "PrintLine", "value": "Hola"}
        assert receipt.qr_code("https://example.com") == {"cmd": "PrintQRCode", "value": "https://example.com"}
        assert receipt.left_align() == {"cmd": "LeftAlign"}
        assert receipt.center_align() == {"cmd": "CenterAlign"}
        assert receipt.right_align() == {"cmd": "RightAlign"}
        assert receipt.clear() == {"cmd": "Clear"}
        assert receipt.full_cut() == {"cmd": "FullCut"}

    def test_feed_lines_value_is_string(self):
        assert receipt.feed_lines(3) == {"cmd": "FeedLines", "value": "3"}

    def test_print_image_width_optional(self):
        assert receipt.print_image("AAAA") == {"cmd": "PrintImage", "value": "AAAA"}
        assert receipt.print_image("AAAA", 200) == {"cmd": "PrintImage", "value": "AAAA", "width": 200}

    def test_style_list_joined(self):
        assert receipt.set_style(["Bold", "Underline"]) == {"cmd": "SetStyles", "value": "Bold, Underline"}
        assert receipt.set_style("Italic") == {"cmd": "SetStyles", "value": "Italic"}

    @pytest.mark.parametrize("style", ["Blink", ["Bold", "Blink"], 5])
    def test_style_rejected(self, style):
        with pytest.raises(CommandValidationError):
            receipt.set_style(style)

    def test_barcode_type_checked(self):
        assert receipt.barcode("123", "CODE128")["type"] == "CODE128"
        with pytest.raises(CommandValidationError):
            receipt.barcode("123", "128")

    def test_code_page_checked(self):
        assert receipt.code_page("PC858_EURO") == {"cmd": "CodePage", "value": "PC858_EURO"}
        with pytest.raises(CommandValidationError):
            receipt.code_page("CP437")


class TestReceiptBuilder:
    def test_methods_chain(self):
        builder = create_invoice()
        assert isinstance(builder, ReceiptCommandBuilder)
        assert builder.initialize().text("a").center() is builder

    @pytest.mark.parametrize("qty", [0, 11, -3, 100])
    def test_feed_out_of_range_appends_nothing(self, qty):
        builder = create_invoice().text("before")
        with pytest.raises(CommandValidationError):
            builder.feed(qty)
        assert builder.commands == [{"cmd": "PrintLine", "value": "before"}]

    @pytest.mark.parametrize("qty", [1, 5, 10])
    def test_feed_in_range(self, qty):
        assert create_invoice().feed(qty).commands == [{"cmd": "FeedLines", "value": str(qty)}]

    def test_text_must_be_string(self):
        builder = create_invoice()
        with pytest.raises(CommandValidationError):
            builder.text(42)
        assert len(builder) == 0

    def test_invalid_code_page_appends_nothing(self):
        builder = create_invoice()
        with pytest.raises(CommandValidationError):
            builder.code_page("KLINGON")
        assert builder.commands == []

    @pytest.mark.asyncio
    async def test_build_keeps_call_order(self):
        commands = await (
            create_invoice()
            .initialize()
            .code_page("WPC1252")
            .center()
            .text_style(["Bold", "DoubleHeight"])
            .text("QikPOS")
            .left()
            .text_style("None")
            .feed(2)
            .qr_code("https://example.com")
            .barcode("123456789012", "JAN13_EAN13")
            .right()
            .clear()
            .full_cut()
            .build()
        )
        assert [c["cmd"] for c in commands] == [
            "Initialize",
            "CodePage",
            "CenterAlign",
            "SetStyles",
            "PrintLine",
            "LeftAlign",
            "SetStyles",
            "FeedLines",
            "PrintQRCode",
            "PrintBarcode",
            "RightAlign",
            "Clear",
            "FullCut",
        ]
        assert commands[3]["value"] == "Bold, DoubleHeight"

    @pytest.mark.asyncio
    async def test_duplicate_receipt_barcodes_are_kept(self):
        commands = await create_invoice().barcode("1", "CODE39").barcode("1", "CODE39").build()
        assert len(commands) == 2

    @pytest.mark.asyncio
    async def test_image_placeholder_replaced_in_place(self, image_source):
        builder = create_invoice(image_source).text("top").image("logo.png", 256).text("bottom")
        assert builder.commands[1] == {"cmd": "PrintImage", "value": PLACEHOLDER, "width": 256}
        assert builder.pending_images == 1

        commands = await builder.build()
        assert commands == [
            {"cmd": "PrintLine", "value": "top"},
            {"cmd": "PrintImage", "value": "b64:logo.png", "width": 256},
            {"cmd": "PrintLine", "value": "bottom"},
        ]
        assert builder.pending_images == 0

    @pytest.mark.asyncio
    async def test_image_resolution_starts_at_call_time(self, image_source):
        builder = create_invoice(image_source).image("a.png")
        await asyncio.sleep(0)
        assert image_source.started == ["a.png"]
        await builder.build()

    @pytest.mark.asyncio
    async def test_images_keep_position_whatever_finishes_first(self):
        source = FakeImageSource(delays={"slow.png": 0.05, "medium.png": 0.02, "fast.png": 0})
        builder = (
            create_invoice(source)
            .image("slow.png")
            .text("between")
            .image("medium.png")
            .image("fast.png")
        )
        commands = await builder.build()
        assert source.completed == ["fast.png", "medium.png", "slow.png"]
        assert [c["value"] for c in commands] == ["b64:slow.png", "between", "b64:medium.png", "b64:fast.png"]

    @pytest.mark.asyncio
    async def test_failed_image_fails_build(self):
        source = FakeImageSource(failing={"missing.png"})
        builder = create_invoice(source).image("ok.png").image("missing.png")
        with pytest.raises(ImageResolutionError, match="missing.png"):
            await builder.build()

    def test_image_outside_event_loop_resolves_at_build(self, image_source):
        builder = create_invoice(image_source).image("logo.png").text("after")
        assert image_source.started == []

        commands = asyncio.run(builder.build())
        assert commands[0] == {"cmd": "PrintImage", "value": "b64:logo.png"}

    def test_invalid_image_width(self, image_source):
        builder = create_invoice(image_source)
        with pytest.raises(CommandValidationError):
            builder.image("logo.png", "wide")
        assert builder.commands == []
        assert builder.pending_images == 0

    @pytest.mark.asyncio
    async def test_build_output_round_trips_through_json(self, image_source):
        commands = await create_invoice(image_source).text("ñandú").image("x.png", 100).feed(1).build()
        assert json.loads(json.dumps(commands)) == commands

    @pytest.mark.asyncio
    async def test_build_returns_copy(self):
        builder = create_invoice().text("a")
        commands = await builder.build()
        commands.append({"cmd": "FullCut"})
        assert len(builder) == 1
