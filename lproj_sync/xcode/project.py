"""Xcode project (``project.pbxproj``) loading, group tree edits and writing."""

import os
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from . import plist
from ..utils.logging import get_logger

logger = get_logger('xcode')

GROUP_ISAS = ('PBXGroup', 'PBXVariantGroup', 'XCVersionGroup')

# Written on one line by Xcode
INLINE_ISAS = ('PBXBuildFile', 'PBXFileReference')

BUILD_PHASE_NAMES = {
    'PBXSourcesBuildPhase': 'Sources',
    'PBXResourcesBuildPhase': 'Resources',
    'PBXFrameworksBuildPhase': 'Frameworks',
    'PBXHeadersBuildPhase': 'Headers',
    'PBXCopyFilesBuildPhase': 'CopyFiles',
    'PBXShellScriptBuildPhase': 'ShellScript',
}

FILE_TYPES = {
    '.strings': 'text.plist.strings',
    '.stringsdict': 'text.plist.stringsdict',
    '.plist': 'text.plist.xml',
    '.json': 'text.json',
    '.swift': 'sourcecode.swift',
    '.m': 'sourcecode.c.objc',
    '.mm': 'sourcecode.cpp.objcpp',
    '.h': 'sourcecode.c.h',
    '.png': 'image.png',
    '.storyboard': 'file.storyboard',
    '.xcassets': 'folder.assetcatalog',
}


class XcodeProjectError(Exception):
    """Raised when an Xcode project is missing or structurally invalid."""
    pass


@dataclass
class GroupChild:
    """A direct child of a group: object id and display name."""
    id: str
    name: Optional[str]


@dataclass
class PBXGroup:
    """Snapshot of a group node."""
    id: str
    name: Optional[str]
    children: List[GroupChild] = field(default_factory=list)

    def has_child(self, name: str) -> bool:
        return any(child.name == name for child in self.children)


class XcodeProject:
    """
    A parsed ``project.pbxproj``.

    ``objects`` is the arena: object id -> attribute dict. Groups refer to
    their children by id, so the tree is walked by looking ids up rather
    than through parent links.
    """

    def __init__(self, filepath: Union[str, Path], data: Dict[str, Any]):
        self.filepath = Path(filepath)
        self.data = data

        objects = data.get('objects')
        if not isinstance(objects, dict):
            raise XcodeProjectError(f"{self.filepath}: missing 'objects' dictionary")
        if data.get('rootObject') not in objects:
            raise XcodeProjectError(f"{self.filepath}: rootObject does not reference a known object")

    @classmethod
    def load(cls, filepath: Union[str, Path]) -> 'XcodeProject':
        """
        Parse a ``project.pbxproj`` file.

        Raises:
            OSError: File cannot be read
            PlistParseError: Malformed property list
            XcodeProjectError: Parsed, but not an Xcode project
        """
        data = plist.load(filepath)
        if not isinstance(data, dict):
            raise XcodeProjectError(f"{filepath}: top-level value is not a dictionary")
        return cls(filepath, data)

    @property
    def name(self) -> str:
        """Project name (``MyApp`` for ``MyApp.xcodeproj``)."""
        return self.filepath.parent.stem

    @property
    def source_root(self) -> Path:
        """Directory containing the ``.xcodeproj`` bundle."""
        return self.filepath.parent.parent

    @property
    def objects(self) -> Dict[str, Dict[str, Any]]:
        return self.data['objects']

    @property
    def root_object_id(self) -> str:
        return self.data['rootObject']

    @property
    def main_group_id(self) -> str:
        main_group = self.objects[self.root_object_id].get('mainGroup')
        if main_group not in self.objects:
            raise XcodeProjectError(f"{self.filepath}: project has no main group")
        return main_group

    def get_object(self, object_id: str) -> Dict[str, Any]:
        try:
            return self.objects[object_id]
        except KeyError:
            raise XcodeProjectError(f"{self.filepath}: unknown object id {object_id}") from None

    def generate_uuid(self) -> str:
        """Return a new 24 character object id not present in the project."""
        while True:
            object_id = uuid.uuid4().hex[:24].upper()
            if object_id not in self.objects:
                return object_id

    def get_display_name(self, object_id: str) -> Optional[str]:
        """Name shown in Xcode's navigator: ``name``, else the basename of ``path``."""
        obj = self.objects.get(object_id)
        if obj is None:
            return None
        if obj.get('name'):
            return obj['name']
        if obj.get('path'):
            return os.path.basename(obj['path'])
        return None

    # Group tree

    def _children_ids(self, group_id: str) -> List[str]:
        group = self.get_object(group_id)
        if group.get('isa') not in GROUP_ISAS:
            raise XcodeProjectError(f"{self.filepath}: {group_id} is not a group ({group.get('isa')})")
        children = group.setdefault('children', [])
        if not isinstance(children, list):
            raise XcodeProjectError(f"{self.filepath}: children of {group_id} is not a list")
        return children

    def get_group(self, group_id: str) -> PBXGroup:
        children = [
            GroupChild(id=child_id, name=self.get_display_name(child_id))
            for child_id in self._children_ids(group_id)
        ]
        return PBXGroup(id=group_id, name=self.get_display_name(group_id), children=children)

    def find_child(self, group_id: str, name: str, groups_only: bool = False) -> Optional[str]:
        """Return the id of the first direct child displayed as name."""
        for child_id in self._children_ids(group_id):
            if self.get_display_name(child_id) != name:
                continue
            if groups_only and self.objects.get(child_id, {}).get('isa') not in GROUP_ISAS:
                continue
            return child_id
        return None

    def group_id_by_path(self, group_path: str) -> Optional[str]:
        """Descend from the main group along ``A/B/C``; None if a segment is missing."""
        group_id = self.main_group_id
        for segment in split_group_path(group_path):
            group_id = self.find_child(group_id, segment, groups_only=True)
            if group_id is None:
                return None
        return group_id

    def group_by_path(self, group_path: str) -> Optional[PBXGroup]:
        group_id = self.group_id_by_path(group_path)
        if group_id is None:
            return None
        return self.get_group(group_id)

    def create_group(self, name: str) -> str:
        """Add an empty group to the arena (not yet attached to a parent)."""
        group_id = self.generate_uuid()
        self.objects[group_id] = {
            'isa': 'PBXGroup',
            'children': [],
            'name': name,
            'sourceTree': '<group>',
        }
        return group_id

    def add_child(self, group_id: str, child_id: str) -> None:
        self._children_ids(group_id).append(child_id)

    # Files and build phases

    def add_file_reference(self, filepath: Union[str, Path]) -> str:
        """
        Add a PBXFileReference for a file.

        Files under the source root are stored relative to it with
        ``sourceTree = SOURCE_ROOT``; anything else keeps its absolute path.
        """
        filepath = Path(filepath)
        file_type = FILE_TYPES.get(filepath.suffix, 'text')

        try:
            relative = filepath.resolve().relative_to(self.source_root.resolve())
            path, source_tree = relative.as_posix(), 'SOURCE_ROOT'
        except ValueError:
            if filepath.is_absolute():
                path, source_tree = filepath.as_posix(), '<absolute>'
            else:
                path, source_tree = filepath.as_posix(), '<group>'

        file_ref: Dict[str, Any] = {'isa': 'PBXFileReference'}
        if file_type.startswith(('text', 'sourcecode')):
            file_ref['fileEncoding'] = '4'
        file_ref['lastKnownFileType'] = file_type
        file_ref['name'] = filepath.name
        file_ref['path'] = path
        file_ref['sourceTree'] = source_tree

        file_ref_id = self.generate_uuid()
        self.objects[file_ref_id] = file_ref
        return file_ref_id

    def first_native_target_id(self) -> Optional[str]:
        targets = self.objects[self.root_object_id].get('targets', [])
        for target_id in targets:
            if self.objects.get(target_id, {}).get('isa') == 'PBXNativeTarget':
                return target_id
        return None

    def build_phase_id(self, isa: str, target_id: Optional[str] = None) -> Optional[str]:
        """Return the target's build phase of the given isa (first native target by default)."""
        target_id = target_id or self.first_native_target_id()
        if target_id is None:
            return None
        for phase_id in self.get_object(target_id).get('buildPhases', []):
            if self.objects.get(phase_id, {}).get('isa') == isa:
                return phase_id
        return None

    def add_build_file(self, file_ref_id: str, phase_isa: str = 'PBXResourcesBuildPhase') -> Optional[str]:
        """
        Add the file reference to a build phase of the first native target.

        Returns:
            New PBXBuildFile id, or None when the target has no such phase
        """
        phase_id = self.build_phase_id(phase_isa)
        if phase_id is None:
            logger.debug(f"No {phase_isa} in {self.name}; {self.get_display_name(file_ref_id)} not added to a build phase")
            return None

        build_file_id = self.generate_uuid()
        self.objects[build_file_id] = {'isa': 'PBXBuildFile', 'fileRef': file_ref_id}
        self.get_object(phase_id).setdefault('files', []).append(build_file_id)
        return build_file_id

    # Writing

    def _comments(self) -> Dict[str, str]:
        """Comment text Xcode writes after each object id."""
        comments: Dict[str, str] = {}
        phase_of: Dict[str, str] = {}
        list_owner: Dict[str, str] = {}

        for object_id, obj in self.objects.items():
            isa = obj.get('isa')
            if isa in BUILD_PHASE_NAMES:
                for build_file_id in obj.get('files', []):
                    phase_of[build_file_id] = obj.get('name') or BUILD_PHASE_NAMES[isa]
            if 'buildConfigurationList' in obj:
                list_owner[obj['buildConfigurationList']] = object_id

        for object_id, obj in self.objects.items():
            isa = obj.get('isa')
            if isa == 'PBXProject':
                comment = 'Project object'
            elif isa == 'PBXBuildFile':
                if 'productRef' in obj:
                    file_name = self.objects.get(obj['productRef'], {}).get('productName', '')
                else:
                    file_name = self.get_display_name(obj.get('fileRef', '')) or ''
                comment = f"{file_name} in {phase_of.get(object_id, 'Resources')}"
            elif isa == 'XCRemoteSwiftPackageReference':
                comment = f'{isa} "{package_name(obj.get("repositoryURL", ""))}"'
            elif isa == 'XCLocalSwiftPackageReference':
                comment = f'{isa} "{obj.get("relativePath", "")}"'
            elif isa == 'XCSwiftPackageProductDependency':
                comment = obj.get('productName')
            elif isa in BUILD_PHASE_NAMES:
                comment = obj.get('name') or BUILD_PHASE_NAMES[isa]
            elif isa == 'XCConfigurationList':
                owner_id = list_owner.get(object_id)
                owner = self.objects.get(owner_id, {})
                owner_name = self.name if owner.get('isa') == 'PBXProject' else owner.get('name', '')
                comment = f'Build configuration list for {owner.get("isa", "PBXProject")} "{owner_name}"'
            elif isa in ('PBXContainerItemProxy', 'PBXTargetDependency'):
                comment = isa
            else:
                comment = self.get_display_name(object_id)

            if comment:
                comments[object_id] = comment

        return comments

    def write(self) -> str:
        """Serialize the project in Xcode's layout."""
        comments = self._comments()

        def annotate(value: str) -> Optional[str]:
            return comments.get(value)

        sections: Dict[str, List[str]] = {}
        for object_id, obj in self.objects.items():
            sections.setdefault(obj.get('isa', ''), []).append(object_id)

        lines = ['// !$*UTF8*$!', '{']
        for key, value in self.data.items():
            if key != 'objects':
                lines.append(f"\t{plist.quote(key)} = {plist.format_value(value, 1, annotate)};")
                continue

            lines.append('\tobjects = {')
            for isa in sorted(sections):
                lines.append('')
                lines.append(f'/* Begin {isa} section */')
                for object_id in sorted(sections[isa]):
                    head = plist.format_value(object_id, annotate=annotate)
                    body = plist.format_value(
                        self.objects[object_id], 2, annotate, inline=isa in INLINE_ISAS
                    )
                    lines.append(f"\t\t{head} = {body};")
                lines.append(f'/* End {isa} section */')
            lines.append('\t};')
        lines.append('}')

        return '\n'.join(lines) + '\n'

    def save(self) -> None:
        """Write the project back to its file."""
        self.filepath.write_text(self.write(), encoding='utf-8')
        logger.debug(f"Saved {self.filepath}")


def split_group_path(group_path: str) -> List[str]:
    return [segment for segment in group_path.split('/') if segment]


def package_name(repository_url: str) -> str:
    """``Alamofire`` for ``https://github.com/Alamofire/Alamofire.git``."""
    name = repository_url.rstrip('/').rsplit('/', 1)[-1]
    return name[:-len('.git')] if name.endswith('.git') else name


def get_project_name(project_root: Union[str, Path]) -> str:
    """
    Name of the iOS project: ``MyApp`` for ``ios/MyApp.xcodeproj``.

    Raises:
        XcodeProjectError: No ``ios/*.xcodeproj`` with a ``project.pbxproj``
    """
    ios_dir = Path(project_root) / 'ios'
    candidates = sorted(
        path for path in ios_dir.glob('*.xcodeproj')
        if (path / 'project.pbxproj').is_file()
    )
    if not candidates:
        raise XcodeProjectError(f"No Xcode project found in {ios_dir}")
    if len(candidates) > 1:
        logger.debug(f"Multiple Xcode projects in {ios_dir}, using {candidates[0].name}")
    return candidates[0].stem


def get_pbxproj_path(project_root: Union[str, Path]) -> Path:
    name = get_project_name(project_root)
    return Path(project_root) / 'ios' / f'{name}.xcodeproj' / 'project.pbxproj'


def get_pbxproj(project_root: Union[str, Path]) -> XcodeProject:
    """Load the iOS project's ``project.pbxproj``."""
    return XcodeProject.load(get_pbxproj_path(project_root))


def ensure_group_recursively(project: XcodeProject, group_path: str) -> Optional[PBXGroup]:
    """
    Find the group at ``A/B/C`` below the main group, creating missing groups.

    Returns:
        The last group on the path (the main group for an empty path)
    """
    group_id = project.main_group_id
    for segment in split_group_path(group_path):
        child_id = project.find_child(group_id, segment, groups_only=True)
        if child_id is None:
            child_id = project.create_group(segment)
            project.add_child(group_id, child_id)
            logger.debug(f"Created group {segment} in {project.get_display_name(group_id) or '<main>'}")
        group_id = child_id

    return project.get_group(group_id)


def add_file_to_group(
    filepath: Union[str, Path],
    group_path: str,
    project: XcodeProject
) -> XcodeProject:
    """
    Reference a file from the group at group_path and add it to the
    first target's Resources phase.

    Raises:
        XcodeProjectError: group_path does not exist
    """
    group_id = project.group_id_by_path(group_path)
    if group_id is None:
        raise XcodeProjectError(f'Xcode PBXGroup with name "{group_path}" could not be found in the Xcode project.')

    file_ref_id = project.add_file_reference(filepath)
    project.add_build_file(file_ref_id)
    project.add_child(group_id, file_ref_id)
    logger.debug(f"Added {Path(filepath).name} to group {group_path}")

    return project
