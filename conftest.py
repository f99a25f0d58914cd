import pytest

LIGHTHOUSE_TEXT = (
    b"The old lighthouse stood at the end of a narrow spit of land, and for most "
    b"of the year nobody went out there except the keeper and his dog. Every "
    b"evening he climbed the spiral stairs, trimmed the wick, polished the great "
    b"lens, and watched the beam sweep across the water. Ships that passed in the "
    b"night never knew his name, but they trusted the light, and that was enough "
    b"for him. In the winter the storms came in from the north and the waves broke "
    b"so high that spray rattled against the windows of the lamp room. He kept a "
    b"log of every vessel he saw, with the time, the weather, and a few words "
    b"about the sea. When he retired, the book ran to eleven volumes, and the "
    b"harbor museum put them on display in a glass case near the door.\n"
    b"Visitors still stop to read the pages. Most of the entries are short and "
    b"plain, but now and then the keeper wrote something longer, about a whale he "
    b"had seen rolling in the swell, or about the morning the fog lifted all at "
    b"once and showed him a fleet of fishing boats waiting just beyond the rocks.\n"
)

GARDEN_TEXT = (
    b"My grandmother kept a garden behind her house that seemed far too large for "
    b"one person to look after. There were rows of beans and potatoes, a patch of "
    b"strawberries under a net to keep the birds away, and a long bed of flowers "
    b"that she changed every spring. She would get up before the sun and work "
    b"until the heat drove her inside, then go out again in the evening with a "
    b"watering can in each hand. When I stayed with her in the summer she taught "
    b"me how to tell a weed from a seedling, how to pinch out the tops of the "
    b"tomato plants, and how to save seeds from the best pods so that next year "
    b"would be even better. She never used a book or wrote anything down. All of "
    b"it was in her head, learned from her own mother on a farm a long way from "
    b"the city where she ended up living.\n"
    b"After she died we found a tin box in the shed full of paper envelopes, each "
    b"one marked in pencil with the name of a plant and the year it was picked. "
    b"Some of them were older than my father. We planted a few of them to see what "
    b"would happen, and to our surprise most of them came up green and strong.\n"
)

RIVER_TEXT = (
    b"The river that runs through the middle of the town was once the only way to "
    b"move goods in and out of the valley. Barges carried grain, timber, and coal "
    b"down to the coast, and came back loaded with cloth, tools, and all the small "
    b"luxuries that the farmers could not make for themselves. The towpath along "
    b"the bank was worn smooth by the feet of horses that pulled the boats against "
    b"the current. When the railway arrived the trade dried up within a few years, "
    b"and the warehouses by the water were left empty for a long time. Some of them "
    b"fell down, and the rest were used to store hay or to shelter cattle in the "
    b"worst of the winter.\n"
    b"Today the river is quiet again, but in a different way. People walk their "
    b"dogs on the old towpath, children fish from the stone steps, and in the "
    b"summer there is a festival with music and a race between teams of rowers in "
    b"boats painted in bright colors. The warehouses have been turned into shops, "
    b"a bakery, and a small theater where the local school puts on a play at the "
    b"end of every term.\n"
)


@pytest.fixture
def lighthouse_text():
    return LIGHTHOUSE_TEXT


@pytest.fixture(params=[LIGHTHOUSE_TEXT, GARDEN_TEXT, RIVER_TEXT],
                ids=["lighthouse", "garden", "river"])
def english_text(request):
    return request.param
