"""
Shared test fixtures.
"""
import pytest

from eaf_engine.index import DerivedIndexCache


@pytest.fixture
def sample_eaf_xml():
    """A small but complete EAF 3.0 file, indented as ELAN writes it."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<ANNOTATION_DOCUMENT AUTHOR="jimbob" DATE="2017-06-19T14:40:01-05:00" FORMAT="3.0" VERSION="3.0" xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" xsi:noNamespaceSchemaLocation="http://www.mpi.nl/tools/elan/EAFv3.0.xsd">
    <LICENSE LICENSE_URL="https://www.gnu.org/licenses/gpl-3.0.txt">GPL</LICENSE>
    <HEADER MEDIA_FILE="" TIME_UNITS="milliseconds">
        <MEDIA_DESCRIPTOR MEDIA_URL="file:///tmp/interview.wav" MIME_TYPE="audio/x-wav"/>
        <PROPERTY NAME="lastUsedAnnotationId">4</PROPERTY>
    </HEADER>
    <TIME_ORDER>
        <TIME_SLOT TIME_SLOT_ID="ts1" TIME_VALUE="100"/>
        <TIME_SLOT TIME_SLOT_ID="ts2"/>
        <TIME_SLOT TIME_SLOT_ID="ts3" TIME_VALUE="300"/>
        <TIME_SLOT TIME_SLOT_ID="ts4" TIME_VALUE="900"/>
    </TIME_ORDER>
    <TIER LINGUISTIC_TYPE_REF="utterance" TIER_ID="speaker">
        <ANNOTATION>
            <ALIGNABLE_ANNOTATION ANNOTATION_ID="a1" TIME_SLOT_REF1="ts1" TIME_SLOT_REF2="ts2">
                <ANNOTATION_VALUE>hello there</ANNOTATION_VALUE>
            </ALIGNABLE_ANNOTATION>
        </ANNOTATION>
        <ANNOTATION>
            <ALIGNABLE_ANNOTATION ANNOTATION_ID="a2" TIME_SLOT_REF1="ts3" TIME_SLOT_REF2="ts4">
                <ANNOTATION_VALUE>bye</ANNOTATION_VALUE>
            </ALIGNABLE_ANNOTATION>
        </ANNOTATION>
    </TIER>
    <TIER LINGUISTIC_TYPE_REF="translation" PARENT_REF="speaker" TIER_ID="english">
        <ANNOTATION>
            <REF_ANNOTATION ANNOTATION_ID="a3" ANNOTATION_REF="a1">
                <ANNOTATION_VALUE>greeting</ANNOTATION_VALUE>
            </REF_ANNOTATION>
        </ANNOTATION>
    </TIER>
    <TIER LINGUISTIC_TYPE_REF="translation" PARENT_REF="english" TIER_ID="gloss">
        <ANNOTATION>
            <REF_ANNOTATION ANNOTATION_ID="a4" ANNOTATION_REF="a3">
                <ANNOTATION_VALUE>GREET</ANNOTATION_VALUE>
            </REF_ANNOTATION>
        </ANNOTATION>
    </TIER>
    <LINGUISTIC_TYPE GRAPHIC_REFERENCES="false" LINGUISTIC_TYPE_ID="utterance" TIME_ALIGNABLE="true"/>
    <LINGUISTIC_TYPE CONSTRAINTS="Symbolic_Association" GRAPHIC_REFERENCES="false" LINGUISTIC_TYPE_ID="translation" TIME_ALIGNABLE="false"/>
    <LOCALE COUNTRY_CODE="US" LANGUAGE_CODE="en"/>
    <LANGUAGE LANG_ID="eng" LANG_LABEL="English (eng)"/>
    <CONSTRAINT DESCRIPTION="1-1 association with a parent annotation" STEREOTYPE="Symbolic_Association"/>
    <CONTROLLED_VOCABULARY CV_ID="moods">
        <DESCRIPTION LANG_REF="eng">Speaker mood</DESCRIPTION>
        <CV_ENTRY_ML CVE_ID="cve1">
            <CVE_VALUE LANG_REF="eng">happy</CVE_VALUE>
        </CV_ENTRY_ML>
    </CONTROLLED_VOCABULARY>
    <REF_LINK_SET LINK_SET_ID="links1">
        <CROSS_REF_LINK REF1="a1" REF2="a2" REF_LINK_ID="rl1" DIRECTIONALITY="unidirectional"/>
        <GROUP_REF_LINK REFS="a1 a2" REF_LINK_ID="rl2"/>
    </REF_LINK_SET>
    <EXTERNAL_REF EXT_REF_ID="er1" TYPE="resource_url" VALUE="http://example.org/moods"/>
</ANNOTATION_DOCUMENT>
"""


@pytest.fixture
def license_xml():
    """The minimal license-only document."""
    return (
        '<ANNOTATION_DOCUMENT AUTHOR="jimbob" DATE="2002-05-30T09:30:10.5" '
        'VERSION="3.0" FORMAT="3.0"><LICENSE>GPL</LICENSE></ANNOTATION_DOCUMENT>'
    )


@pytest.fixture
def cache():
    """A private index cache so tests do not share memoized state."""
    return DerivedIndexCache()
